"""End-to-end tests for the extract-palette command."""

import sys

import numpy as np
import pytest

from extract_palette import main


def _half_red_half_blue(size=8):
    image = np.zeros((size, size, 4), dtype=np.uint8)
    image[..., 3] = 255
    image[:, : size // 2, 0] = 255
    image[:, size // 2 :, 2] = 255
    return image


class TestSingleFile:
    def test_palette_lines(self, write_png, capsys):
        path = write_png("flag.png", _half_red_half_blue())
        assert main([str(path), "--colours", "5", "--quality", "1"]) == 0
        out = capsys.readouterr().out
        assert "=== flag.png ===" in out
        assert "Palette (2 of 5 requested):" in out
        assert "#0000ff  rgb(0, 0, 255)  hsl(240, 100%, 50%)  text=#ffffff" in out
        assert "#ff0000  rgb(255, 0, 0)  hsl(0, 100%, 50%)" in out

    def test_map_dominant_average(self, write_png, capsys):
        path = write_png("flag.png", _half_red_half_blue())
        argv = [str(path), "--quality", "1", "--map", "#FE0101", "--dominant", "--average"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "Map: #fe0101 -> #ff0000" in out
        assert "Dominant: #" in out
        assert "Average: #7f007f" in out

    def test_clamped_request_warns(self, write_png, capsys):
        path = write_png("flag.png", _half_red_half_blue())
        assert main([str(path), "--colours", "99", "--quality", "1"]) == 0
        assert "[warn] clamped request to colours=20 quality=1" in capsys.readouterr().out

    def test_transparent_image(self, write_png, capsys):
        path = write_png("clear.png", np.zeros((4, 4, 4), dtype=np.uint8))
        assert main([str(path)]) == 1
        assert "No colours available" in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.png")]) == 2
        assert "[error] not found" in capsys.readouterr().err


class TestFolder:
    def test_output_in_name_order(self, write_png, tmp_path, capsys):
        write_png("b.png", _half_red_half_blue())
        write_png("a.png", _half_red_half_blue())
        (tmp_path / "notes.txt").write_text("skip me")
        assert main([str(tmp_path), "--jobs", "2", "--quality", "1"]) == 0
        out = capsys.readouterr().out
        assert out.index("=== a.png ===") < out.index("=== b.png ===")
        assert "notes.txt" not in out

    def test_empty_folder(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 1
        assert "[warn] no images" in capsys.readouterr().out

    def test_many_files_many_workers(self, write_png, tmp_path, rng, capsys):
        """Every file's block is printed exactly once, in name order."""
        names = [f"img{i:02d}.png" for i in range(24)]
        for name in names:
            rgba = rng.integers(0, 256, size=(16, 16, 4)).astype(np.uint8)
            rgba[..., 3] = 255
            write_png(name, rgba)

        stdout_before = sys.stdout
        assert main([str(tmp_path), "--jobs", "8", "--quality", "1"]) == 0
        assert sys.stdout is stdout_before

        out = capsys.readouterr().out
        positions = []
        for name in names:
            banner = f"=== {name} ==="
            assert out.count(banner) == 1
            positions.append(out.index(banner))
        assert positions == sorted(positions)
        assert out.count("Palette (") == len(names)

    @pytest.mark.parametrize("jobs", ["1", "2"])
    def test_failed_file_sets_exit_status(self, write_png, tmp_path, capsys, jobs):
        write_png("a.png", _half_red_half_blue())
        write_png("b.png", np.zeros((4, 4, 4), dtype=np.uint8))
        assert main([str(tmp_path), "--jobs", jobs, "--quality", "1"]) == 1
        out = capsys.readouterr().out
        assert "=== a.png ===" in out
        assert "#ff0000  rgb(255, 0, 0)" in out
        assert "No colours available" in out
