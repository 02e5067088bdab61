import json
import struct

import pytest

from assetbin.cli import main
from assetbin.formats.bmp import decode_bitmap
from assetbin.formats.registry import (
    UnsupportedFormatError,
    decode_file,
    decoder_for,
    supported_extensions,
)

WAV = (
    b"RIFF" + struct.pack("<I", 36) + b"WAVE"
    + b"fmt " + struct.pack("<I", 16) + struct.pack("<HHIIHH", 1, 1, 8000, 16000, 2, 16)
    + b"data" + struct.pack("<I", 0)
)


def test_supported_extensions():
    assert supported_extensions() == [".ani", ".bmp", ".csf", ".wav"]


def test_decoder_for_is_case_insensitive():
    assert decoder_for("Art/Splash.BMP") is decode_bitmap


def test_unsupported_extension():
    with pytest.raises(UnsupportedFormatError) as ei:
        decoder_for("Data/readme.txt")
    assert ".txt" in str(ei.value)


def test_decode_file(tmp_path):
    p = tmp_path / "beep.wav"
    p.write_bytes(WAV)
    wav = decode_file(p)
    assert wav.format.sample_rate == 8000
    assert wav.data_size == 0


def test_cli_info(tmp_path, capsys):
    p = tmp_path / "beep.wav"
    p.write_bytes(WAV)
    assert main(["info", str(p)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["format"]["audio_format"] == 1
    assert out["data_size"] == 0


def test_cli_info_with_offset(tmp_path, capsys):
    p = tmp_path / "packed.wav"
    p.write_bytes(b"\x00" * 6 + WAV)
    assert main(["info", str(p), "--offset", "6"]) == 0
    assert json.loads(capsys.readouterr().out)["format"]["channels"] == 1


def test_cli_info_truncated(tmp_path, capsys):
    p = tmp_path / "cut.wav"
    p.write_bytes(WAV[:20])
    assert main(["info", str(p)]) == 1
    assert "underrun" in capsys.readouterr().err


def test_cli_info_unsupported_and_missing(tmp_path, capsys):
    assert main(["info", str(tmp_path / "notes.txt")]) == 1
    assert "no decoder" in capsys.readouterr().err
    assert main(["info", str(tmp_path / "absent.bmp")]) == 1


def test_cli_formats(capsys):
    assert main(["--log-level", "debug", "formats"]) == 0
    assert capsys.readouterr().out.split() == [".ani", ".bmp", ".csf", ".wav"]


def test_cli_without_command(capsys):
    assert main([]) == 2


def test_cli_rejects_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--log-level", "bogus", "formats"])
    assert ei.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_cli_bad_log_level_from_environment(settings_env, capsys):
    settings_env(log_level="chatty")
    assert main(["formats"]) == 2
    assert "unknown log level: CHATTY" in capsys.readouterr().err
