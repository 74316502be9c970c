"""Tests for image I/O and the command-line entry point."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pathlib import Path

import numpy as np
import torch
import pytest
from PIL import Image
from seamcarve.cli import build_parser, main
from seamcarve.grid import PixelGrid
from seamcarve.image_io import load_grid, save_grid

from conftest import make_random_grid


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    """Write a small non-square test PNG to disk."""
    array = np.random.default_rng(11).integers(0, 256, size=(6, 8, 3), dtype=np.uint8)
    path = tmp_path / "input.png"
    Image.fromarray(array).save(path)
    return path


def feed_input(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr('builtins.input', lambda prompt='': next(answers))


class TestImageIO:
    def test_save_load_round_trip(self, tmp_path):
        grid = make_random_grid(7, 5, seed=3)
        path = tmp_path / "nested" / "out.png"
        save_grid(grid, path)
        assert path.exists()
        assert load_grid(path).equals(grid)

    def test_load_drops_alpha(self, tmp_path):
        rgba = np.zeros((4, 5, 4), dtype=np.uint8)
        rgba[..., 0] = 200
        rgba[..., 3] = 17
        path = tmp_path / "alpha.png"
        Image.fromarray(rgba).save(path)

        grid = load_grid(path)
        assert (grid.width(), grid.height()) == (5, 4)
        assert grid.get(0, 0) == (200, 0, 0)

    def test_saved_file_is_png(self, tmp_path):
        path = tmp_path / "out.png"
        save_grid(PixelGrid.uniform(3, 3, (1, 2, 3)), path)
        with Image.open(path) as img:
            assert img.format == 'PNG'
            assert img.mode == 'RGB'

    @pytest.mark.parametrize("fmt", ["bmp", "tiff", "PNG"])
    def test_other_lossless_formats_round_trip(self, tmp_path, fmt):
        grid = make_random_grid(6, 4, seed=9)
        path = tmp_path / f"out.{fmt.lower()}"
        save_grid(grid, path, fmt=fmt)
        assert load_grid(path).equals(grid)

    @pytest.mark.parametrize("fmt", ["jpeg", "webp", "gif"])
    def test_rejects_lossy_formats(self, tmp_path, fmt):
        path = tmp_path / "out.img"
        with pytest.raises(ValueError):
            save_grid(make_random_grid(4, 4), path, fmt=fmt)
        assert not path.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_grid(tmp_path / "missing.png")


class TestCli:
    def test_parser_accepts_short_flags(self):
        args = build_parser().parse_args(['-in', 'a.png', '-out', 'b.png',
                                          '--width', '4', '--height', '5'])
        assert (args.input, args.output, args.width, args.height) == ('a.png', 'b.png', 4, 5)

    def test_resizes_from_arguments(self, image_path, tmp_path):
        output = tmp_path / "out.png"
        code = main(['-in', str(image_path), '-out', str(output),
                     '--width', '5', '--height', '8'])
        assert code == 0
        with Image.open(output) as img:
            assert img.size == (5, 8)

    def test_prompts_for_missing_values(self, image_path, tmp_path, monkeypatch):
        output = tmp_path / "prompted.png"
        feed_input(monkeypatch, [str(image_path), str(output), "6", "4"])
        assert main([]) == 0
        with Image.open(output) as img:
            assert img.size == (6, 4)

    def test_non_integer_size(self, image_path, tmp_path, monkeypatch):
        feed_input(monkeypatch, ["wide"])
        with pytest.raises(SystemExit) as excinfo:
            main(['-in', str(image_path), '-out', str(tmp_path / "x.png"), '--height', '4'])
        assert excinfo.value.code == 2

    def test_invalid_target_fails(self, image_path, tmp_path):
        output = tmp_path / "never.png"
        code = main(['-in', str(image_path), '-out', str(output),
                     '--width', '0', '--height', '4'])
        assert code == 1
        assert not output.exists()

    def test_unreadable_input_fails(self, tmp_path):
        code = main(['-in', str(tmp_path / "missing.png"), '-out', str(tmp_path / "o.png"),
                     '--width', '4', '--height', '4'])
        assert code == 1

    def test_lossy_format_option_rejected(self, image_path, tmp_path):
        output = tmp_path / "out.jpg"
        with pytest.raises(SystemExit) as excinfo:
            main(['-in', str(image_path), '-out', str(output),
                  '--width', '8', '--height', '6', '--format', 'jpeg'])
        assert excinfo.value.code == 2
        assert not output.exists()

    def test_bmp_output_is_exact(self, image_path, tmp_path):
        output = tmp_path / "same.bmp"
        code = main(['-in', str(image_path), '-out', str(output),
                     '--width', '8', '--height', '6', '--format', 'bmp'])
        assert code == 0
        assert load_grid(output).equals(load_grid(image_path))

    def test_negative_log_every_rejected(self):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(['--log-every', '-1'])
        assert excinfo.value.code == 2

    def test_log_every_zero_allowed(self):
        assert build_parser().parse_args(['--log-every', '0']).log_every == 0

    def test_unknown_device_fails(self, image_path, tmp_path):
        code = main(['-in', str(image_path), '-out', str(tmp_path / "o.png"),
                     '--width', '4', '--height', '4', '--device', 'not-a-device'])
        assert code == 1

    def test_unavailable_cuda_fails(self, image_path, tmp_path, monkeypatch):
        monkeypatch.setattr(torch.cuda, 'is_available', lambda: False)
        output = tmp_path / "o.png"
        code = main(['-in', str(image_path), '-out', str(output),
                     '--width', '4', '--height', '4', '--device', 'cuda'])
        assert code == 1
        assert not output.exists()
