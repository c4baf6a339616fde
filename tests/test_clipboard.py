"""Tests for clipboard access."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from afflink.clipboard import copy_to_clipboard, find_copy_command
from afflink.exceptions import ClipboardError


class TestFindCopyCommand:
    def test_first_available_wins(self):
        available = {"wl-copy", "xclip"}
        with patch("afflink.clipboard.shutil.which", side_effect=lambda name: name if name in available else None):
            assert find_copy_command() == ["wl-copy"]

    def test_xclip_selection(self):
        with patch("afflink.clipboard.shutil.which", side_effect=lambda name: name if name == "xclip" else None):
            assert find_copy_command() == ["xclip", "-selection", "clipboard"]

    def test_none_available(self):
        with patch("afflink.clipboard.shutil.which", return_value=None):
            assert find_copy_command() is None


class TestCopyToClipboard:
    def test_pipes_text_to_command(self):
        with patch("afflink.clipboard.subprocess.run") as mock_run:
            copy_to_clipboard("https://aff.example/x", command=["pbcopy"])

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["pbcopy"]
        assert kwargs["input"] == "https://aff.example/x"
        assert kwargs["check"] is True

    def test_no_command(self):
        with patch("afflink.clipboard.shutil.which", return_value=None), pytest.raises(ClipboardError):
            copy_to_clipboard("x")

    def test_command_fails(self):
        err = subprocess.CalledProcessError(1, ["xclip"], stderr="Error: Can't open display")
        with patch("afflink.clipboard.subprocess.run", side_effect=err), pytest.raises(ClipboardError):
            copy_to_clipboard("x", command=["xclip"])

    def test_command_missing(self):
        with patch("afflink.clipboard.subprocess.run", side_effect=FileNotFoundError("pbcopy")), \
             pytest.raises(ClipboardError):
            copy_to_clipboard("x", command=["pbcopy"])
