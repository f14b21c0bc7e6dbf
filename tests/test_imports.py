#!/usr/bin/env python3
"""
Test module to verify imports are working correctly.
Uses pytest for automated testing of imports from different modules.
"""

import sys
import os
import pytest

# Add the parent directory to sys.path to allow imports from the root directory
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def test_config_imports():
    """Test that configuration imports work correctly."""
    from odh_player_app.config import DEFAULT_VOLUME, TRANSITION_DELAY_MS
    assert 0 <= DEFAULT_VOLUME <= 100, "DEFAULT_VOLUME should be a percentage"
    assert TRANSITION_DELAY_MS == 200, "TRANSITION_DELAY_MS should match the fade-out"

def test_core_imports():
    """Test that core imports work correctly."""
    from odh_player_app.core import PlaybackController, TrackCatalog, ContinuousInputHandler
    assert PlaybackController is not None, "PlaybackController should be defined"
    assert TrackCatalog is not None, "TrackCatalog should be defined"
    assert ContinuousInputHandler is not None, "ContinuousInputHandler should be defined"

def test_catalog_source_imports():
    """Test that the catalog loader imports work correctly."""
    from odh_player_app.data.catalog_source import load_catalog
    assert callable(load_catalog), "load_catalog should be a callable"

@pytest.mark.optional
def test_ui_imports():
    """
    Test that UI imports work correctly.
    This test is marked as optional since it requires the Qt widget libraries.
    """
    try:
        from odh_player_app.ui.main_window import MainWindow
        assert MainWindow is not None, "MainWindow should be defined"
    except ImportError as e:
        pytest.skip(f"UI imports failed (this is acceptable if Qt widgets are unavailable): {e}")

def test_cli_parser():
    """Test the command line options."""
    from odh_player_app.main import build_parser
    args = build_parser().parse_args(["-v", "--track", "3"])
    assert args.verbose is True
    assert args.track == 3
    assert args.catalog is None
