"""ABOUTME: Tests for the wave-codes command-line interface."""

import json

import pytest

from wave_codes_mcp.cli import build_parser, main

TRACK_A = "69Kzq3FMkDwiSFBQzRckFD"
TRACK_B = "3wUMcPzXcmaeW8QxTdyXQO"
PLAYLIST_URL = "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M"


@pytest.fixture
def cli_env(clean_env, tmp_path):
    """Fixture running the CLI from an isolated directory with no .env file."""
    clean_env.chdir(tmp_path)
    return clean_env


class TestParser:
    """Tests for argument parsing."""

    def test_render_requires_an_input(self):
        """Test render refuses to run without track IDs."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["render"])

    def test_render_inputs_are_exclusive(self):
        """Test only one input source may be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["render", "--tracks", "a", "--file", "b"])

    def test_render_defaults(self):
        """Test render defaults match the page defaults."""
        args = build_parser().parse_args(["render", "-t", "a"])
        assert args.output == "wave_codes.html"
        assert args.columns == 4
        assert args.size == 640
        assert args.background == "white"


class TestRenderCommand:
    """Tests for the render subcommand."""

    def test_render_from_tracks(self, cli_env, tmp_path, capsys):
        """Test rendering a comma-separated list."""
        output = tmp_path / "page.html"

        assert main(["render", "-t", f"{TRACK_A}, {TRACK_B}", "-o", str(output), "-c", "2"]) == 0

        html = output.read_text(encoding="utf-8")
        assert html.count('class="song"') == 2
        assert "repeat(2, 1fr)" in html
        assert "2 wave codes in 2-column layout" in capsys.readouterr().out

    def test_render_from_text_file(self, cli_env, tmp_path):
        """Test rendering IDs read from a text file."""
        source = tmp_path / "tracks.txt"
        source.write_text(f"{TRACK_A}\n{TRACK_B}\n", encoding="utf-8")
        output = tmp_path / "page.html"

        assert main(["render", "-f", str(source), "-o", str(output), "--title", "Party"]) == 0
        assert "<title>Party</title>" in output.read_text(encoding="utf-8")

    def test_render_from_json_file(self, cli_env, tmp_path):
        """Test rendering IDs read from a JSON array."""
        source = tmp_path / "tracks.json"
        source.write_text(json.dumps([TRACK_A]), encoding="utf-8")
        output = tmp_path / "page.html"

        assert main(["render", "-j", str(source), "-o", str(output)]) == 0
        assert TRACK_A in output.read_text(encoding="utf-8")

    def test_render_invalid_columns(self, cli_env, tmp_path, capsys):
        """Test an invalid layout exits non-zero without writing output."""
        output = tmp_path / "page.html"

        assert main(["render", "-t", TRACK_A, "-o", str(output), "-c", "0"]) == 1
        assert not output.exists()
        assert "Error:" in capsys.readouterr().err

    def test_render_empty_list(self, cli_env, tmp_path):
        """Test an input with no IDs is an error."""
        assert main(["render", "-t", " , ", "-o", str(tmp_path / "page.html")]) == 1

    def test_render_missing_file(self, cli_env, tmp_path, capsys):
        """Test a missing input file is reported."""
        assert main(["render", "-f", str(tmp_path / "nope.txt")]) == 1
        assert "Error:" in capsys.readouterr().err

    @pytest.mark.parametrize("flag", ["-f", "-j"])
    def test_render_undecodable_file(self, cli_env, tmp_path, capsys, flag):
        """Test a file that is not UTF-8 is reported instead of crashing."""
        source = tmp_path / "tracks.bin"
        source.write_bytes(b"\xff\xfeabc\n")
        output = tmp_path / "page.html"

        assert main(["render", flag, str(source), "-o", str(output)]) == 1
        assert "Error:" in capsys.readouterr().err
        assert not output.exists()


class TestConfigurationErrors:
    """Tests for malformed settings at the command line."""

    def test_malformed_timeout(self, cli_env, tmp_path, capsys):
        """Test a bad environment value is reported as a configuration error."""
        cli_env.setenv("WAVE_CODES_EXTRACTION_TIMEOUT", "abc")

        assert main(["render", "-t", TRACK_A, "-o", str(tmp_path / "page.html")]) == 1

        err = capsys.readouterr().err
        assert "Error: Invalid configuration" in err
        assert "extraction_timeout" in err.lower()

    def test_unknown_extractor_mode(self, cli_env, capsys):
        """Test an unsupported mode is reported before anything runs."""
        cli_env.setenv("WAVE_CODES_EXTRACTOR_MODE", "socket")

        assert main(["extract", "-u", PLAYLIST_URL]) == 1
        assert "Invalid configuration" in capsys.readouterr().err


class TestCollectCommand:
    """Tests for the collect subcommand."""

    def test_collect_links(self, cli_env, tmp_path):
        """Test unique sorted IDs are written out."""
        source = tmp_path / "links.txt"
        source.write_text(
            f"https://open.spotify.com/track/{TRACK_B}\nspotify:track:{TRACK_A}\n{TRACK_B}\n",
            encoding="utf-8",
        )
        output = tmp_path / "ids.txt"

        assert main(["collect", "-i", str(source), "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8").splitlines() == sorted([TRACK_A, TRACK_B])

    def test_collect_undecodable_input(self, cli_env, tmp_path, capsys):
        """Test a binary input file exits non-zero with a diagnostic."""
        source = tmp_path / "export.csv"
        source.write_bytes(b"\xff\xfe\x00\x81")

        assert main(["collect", "-i", str(source), "-o", str(tmp_path / "ids.txt")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_collect_nothing_found(self, cli_env, tmp_path):
        """Test input without IDs exits non-zero."""
        source = tmp_path / "empty.txt"
        source.write_text("no tracks here\n", encoding="utf-8")

        assert main(["collect", "-i", str(source), "-o", str(tmp_path / "ids.txt")]) == 1


class TestExtractCommand:
    """Tests for the extract subcommand."""

    def test_extract_prints_ids(self, cli_env, workdir, fake_extractor, capsys):
        """Test extraction through the configured binary."""
        binary = fake_extractor("""
            write_artifact("abc123\\ndef456\\n")
        """)
        cli_env.setenv("SPOTIFY_CLIENT_ID", "env-id")
        cli_env.setenv("SPOTIFY_CLIENT_SECRET", "env-secret")
        cli_env.setenv("WAVE_CODES_WORKDIR", str(workdir))
        cli_env.setenv("WAVE_CODES_EXTRACTOR_BINARY", str(binary))

        assert main(["extract", "-u", PLAYLIST_URL]) == 0

        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["abc123", "def456"]
        assert "env-secret" not in captured.out + captured.err

    def test_extract_to_file(self, cli_env, workdir, fake_extractor, tmp_path):
        """Test extracted IDs can be saved to a file."""
        binary = fake_extractor("""
            write_artifact("abc123\\n")
        """)
        cli_env.setenv("SPOTIFY_CLIENT_ID", "env-id")
        cli_env.setenv("SPOTIFY_CLIENT_SECRET", "env-secret")
        cli_env.setenv("WAVE_CODES_WORKDIR", str(workdir))
        cli_env.setenv("WAVE_CODES_EXTRACTOR_BINARY", str(binary))
        output = tmp_path / "ids.txt"

        assert main(["extract", "-u", PLAYLIST_URL, "-o", str(output)]) == 0
        assert output.read_text(encoding="utf-8") == "abc123"

    def test_extract_without_credentials(self, cli_env, capsys):
        """Test missing credentials exit non-zero with a clear message."""
        assert main(["extract", "-u", PLAYLIST_URL]) == 1
        assert "SPOTIFY_CLIENT_ID" in capsys.readouterr().err
