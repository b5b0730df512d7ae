import itertools

import pytest

from common import CommandLineError, ErrorCode
from options import Options, parse_options


def test_speak_mode_minimal():
    opts = parse_options(["-i", "in.ssml"])
    assert opts == Options(input_file="in.ssml")


def test_long_flags():
    opts = parse_options(["--input", "in.ssml", "--output", "out.wav", "--recording", "--verbose",
                          "--language", "DE", "--gender", "male"])
    assert opts == Options(input_file="in.ssml", output_file="out.wav", recording=True,
                           verbose=True, language="de", gender="male")


@pytest.mark.parametrize("recording,verbose,language,output",
                         list(itertools.product([False, True], [False, True], [None, "en"], [None, "o.wav"])))
def test_every_flag_combination_is_reflected(recording, verbose, language, output):
    argv = ["-i", "in.ssml"]
    if recording:
        argv.append("-r")
    if verbose:
        argv.append("-v")
    if language:
        argv += ["-l", language]
    if output:
        argv += ["-o", output]

    if recording and output is None:
        with pytest.raises(CommandLineError):
            parse_options(argv)
        return

    opts = parse_options(argv)
    assert opts.input_file == "in.ssml"
    assert opts.recording is recording
    assert opts.verbose is verbose
    assert opts.language == language
    assert opts.output_file == output
    assert opts.display_voices is False


def test_display_voices_needs_no_files():
    opts = parse_options(["-d", "-v"])
    assert opts.display_voices and opts.verbose
    assert opts.input_file is None


def test_missing_input_file():
    with pytest.raises(CommandLineError) as exc:
        parse_options(["-r", "-o", "out.wav"])
    assert exc.value.exit_code == ErrorCode.COMMAND_LINE_ERROR
    assert "standard input" not in str(exc.value)


def test_missing_input_file_verbose_explains():
    with pytest.raises(CommandLineError) as exc:
        parse_options(["-v"])
    assert "cannot read SSML text from standard input" in str(exc.value)


def test_recording_without_output_file():
    with pytest.raises(CommandLineError) as exc:
        parse_options(["-i", "in.ssml", "-r", "-v"])
    assert exc.value.exit_code == ErrorCode.COMMAND_LINE_ERROR
    assert "cannot write audio data to standard output" in str(exc.value)


@pytest.mark.parametrize("flag", ["--help", "--version"])
def test_help_and_version(flag, capsys):
    with pytest.raises(CommandLineError) as exc:
        parse_options([flag])
    assert exc.value.exit_code == ErrorCode.VERSION_OR_HELP_REQUIRED
    assert "text-to-speech" in capsys.readouterr().out


def test_unknown_flag_is_command_line_error():
    with pytest.raises(CommandLineError) as exc:
        parse_options(["-i", "in.ssml", "--bogus"])
    assert exc.value.exit_code == ErrorCode.COMMAND_LINE_ERROR


@pytest.mark.parametrize("code", ["eng", "e", "1x"])
def test_language_must_be_two_letters(code):
    with pytest.raises(CommandLineError):
        parse_options(["-i", "in.ssml", "-l", code])


def test_default_gender_from_config():
    assert parse_options(["-i", "a", "-l", "en"], default_gender="male").gender == "male"
    assert parse_options(["-i", "a", "-l", "en", "-g", "female"], default_gender="male").gender == "female"
