import json

from oracle.drivers import (
    ClaudeDriver,
    CodexDriver,
    GeminiDriver,
    available_drivers,
    default_model_for,
    get_driver,
)


def test_registry_lists_all_drivers():
    assert available_drivers() == ["claude", "codex", "gemini"]


def test_get_driver_by_name():
    assert isinstance(get_driver("claude"), ClaudeDriver)
    assert isinstance(get_driver("codex"), CodexDriver)
    assert isinstance(get_driver("gemini"), GeminiDriver)


def test_unknown_driver_falls_back_to_gemini():
    assert isinstance(get_driver("bogus"), GeminiDriver)
    assert isinstance(get_driver(None), GeminiDriver)


def test_non_string_driver_name_falls_back_to_gemini():
    assert isinstance(get_driver(["claude"]), GeminiDriver)
    assert isinstance(get_driver({"name": "claude"}), GeminiDriver)


def test_default_models():
    assert default_model_for("gemini") == "gemini-2.5-flash"
    assert default_model_for("claude") == "claude-sonnet-4-5-20250514"
    assert default_model_for("codex") == "codex-mini-latest"


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

def test_gemini_command_points_at_prompt_file():
    command = GeminiDriver().build_command("/tmp/prompt.md", "gemini-2.5-flash")
    assert command == [
        "gemini", "--model", "gemini-2.5-flash",
        "--prompt", "@/tmp/prompt.md",
        "--output-format", "json", "--yolo",
    ]


def test_gemini_command_is_deterministic():
    driver = GeminiDriver()
    assert driver.build_command("/tmp/p.md", "m") == driver.build_command("/tmp/p.md", "m")


def test_gemini_unwraps_envelope():
    output = json.dumps({
        "session_id": "test-session",
        "response": "The actual response text",
        "stats": {"tokens": 100},
    })
    result = GeminiDriver().parse_output(output)
    assert result.text == "The actual response text"
    assert result.session_id == "test-session"


def test_gemini_tries_alternate_keys_in_order():
    output = json.dumps({"response": "", "output_text": "from output_text", "text": "from text"})
    assert GeminiDriver().parse_output(output).text == "from output_text"

    output = json.dumps({"content": "from content"})
    assert GeminiDriver().parse_output(output).text == "from content"


def test_gemini_ignores_non_string_session_id():
    output = json.dumps({"response": "hi", "session_id": 42})
    assert GeminiDriver().parse_output(output).session_id is None


def test_gemini_falls_back_to_raw_output():
    result = GeminiDriver().parse_output("  raw text output \n")
    assert result.text == "raw text output"
    assert result.session_id is None


def test_gemini_envelope_without_text_keys_falls_back():
    output = json.dumps({"stats": {}})
    assert GeminiDriver().parse_output(output).text == output


# ---------------------------------------------------------------------------
# Claude
# ---------------------------------------------------------------------------

def test_claude_command():
    command = ClaudeDriver().build_command("/tmp/prompt.txt", "claude-sonnet-4-5-20250514")
    assert command == [
        "claude", "-p", "@/tmp/prompt.txt",
        "--model", "claude-sonnet-4-5-20250514",
        "--output-format", "json",
    ]


def test_claude_unwraps_result():
    result = ClaudeDriver().parse_output(json.dumps({"result": "Extracted result text", "cost": 0.1}))
    assert result.text == "Extracted result text"


def test_claude_falls_back_to_raw_output():
    assert ClaudeDriver().parse_output("plain text\n").text == "plain text"


# ---------------------------------------------------------------------------
# Codex
# ---------------------------------------------------------------------------

def test_codex_passes_prompt_inline(tmp_path):
    prompt_file = tmp_path / "prompt.md"
    prompt_file.write_text("test prompt content")

    command = CodexDriver().build_command(str(prompt_file), "codex-mini-latest")
    assert command == ["codex", "-p", "test prompt content", "--model", "codex-mini-latest"]


def test_codex_missing_prompt_file_sends_empty_prompt(tmp_path):
    command = CodexDriver().build_command(str(tmp_path / "missing.md"), "m")
    assert command == ["codex", "-p", "", "--model", "m"]


def test_codex_output_is_only_trimmed():
    result = CodexDriver().parse_output('  {"result": "not unwrapped"}  ')
    assert result.text == '{"result": "not unwrapped"}'
    assert result.session_id is None
