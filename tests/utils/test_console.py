import gemini_cli.utils.console as console_utils


def test_success_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.success("ok")
    mock_print.assert_called_once()


def test_error_prints(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.error("fail")
    mock_print.assert_called_once()


def test_warning_and_info_print(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.warning("warn")
    console_utils.info("hello")
    assert mock_print.call_count == 2


def test_create_table():
    table = console_utils.create_table("Title", ["Key", "Value", "Source"])
    assert table.title == "Title"
    assert len(table.columns) == 3


def test_display_json_renders_panel(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.display_json({"ui": {"theme": "dark"}}, "Effective settings")

    panel = mock_print.call_args[0][0]
    assert panel.title == "Effective settings"
    assert '"theme": "dark"' in panel.renderable.code


def test_display_messages_joins_lines(mocker):
    mock_print = mocker.patch.object(console_utils.console, "print")
    console_utils.display_messages(["first", "second"], "Missing credentials")

    panel = mock_print.call_args[0][0]
    assert panel.renderable == "first\nsecond"
    assert panel.border_style == "red"
