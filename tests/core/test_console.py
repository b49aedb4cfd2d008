"""Tests for folio.core.console - sinks and show()."""

import io

from rich.console import Console

from folio.core.console import BufferSink, ConsoleSink, FOLIO_THEME, get_sink, set_sink, show, styled_line
from folio.core.render import LineKind, MessageLine, Severity
from folio.core.result import Ok, error


def _console(*, terminal: bool) -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        theme=FOLIO_THEME,
        force_terminal=terminal,
        color_system="standard" if terminal else None,
        width=200,
    )
    return console, buffer


class TestShow:
    def test_ok_goes_to_info_channel(self, buffer_sink):
        show(Ok(), sink=buffer_sink)
        assert buffer_sink.records == [(Severity.INFO, "No error detected")]

    def test_error_goes_to_error_channel(self, buffer_sink, nested_failure):
        show(nested_failure, sink=buffer_sink)
        assert buffer_sink.records == [(Severity.ERROR, "stage B:\n- stage A:\n  - bad input")]

    def test_depth_is_forwarded(self, buffer_sink):
        show(error("x"), 2, sink=buffer_sink)
        assert buffer_sink.text() == "  - x"

    def test_single_write_per_call(self, buffer_sink, nested_failure):
        show(nested_failure, sink=buffer_sink)
        assert len(buffer_sink.records) == 1

    def test_resolver_is_forwarded(self, buffer_sink, fake_resolver):
        from folio.core.result import located

        show(located(2, "a.md"), sink=buffer_sink, resolver=fake_resolver)
        assert buffer_sink.text() == "a.md: resolved platform error"

    def test_default_sink_can_be_replaced(self, buffer_sink):
        set_sink(buffer_sink)
        show(error("x"))
        assert get_sink() is buffer_sink
        assert buffer_sink.text(Severity.ERROR) == "x"


class TestBufferSink:
    def test_text_filters_by_severity(self, buffer_sink):
        show(Ok(), sink=buffer_sink)
        show(error("x"), sink=buffer_sink)
        assert buffer_sink.text(Severity.INFO) == "No error detected"
        assert buffer_sink.text(Severity.ERROR) == "x"
        assert buffer_sink.text() == "No error detected\nx"

    def test_clear(self, buffer_sink):
        show(Ok(), sink=buffer_sink)
        buffer_sink.clear()
        assert buffer_sink.records == []


class TestConsoleSink:
    def test_routes_by_severity(self, nested_failure):
        info, info_buf = _console(terminal=False)
        err, err_buf = _console(terminal=False)
        sink = ConsoleSink(info, err)

        show(Ok(), sink=sink)
        show(nested_failure, sink=sink)

        assert info_buf.getvalue() == "No error detected\n"
        assert err_buf.getvalue() == "stage B:\n- stage A:\n  - bad input\n"

    def test_no_styling_without_terminal(self):
        info, _ = _console(terminal=False)
        err, err_buf = _console(terminal=False)
        show(error("x"), sink=ConsoleSink(info, err))
        assert "\x1b[" not in err_buf.getvalue()

    def test_styles_applied_on_terminal(self, nested_failure):
        info, _ = _console(terminal=True)
        err, err_buf = _console(terminal=True)
        show(nested_failure, sink=ConsoleSink(info, err))
        output = err_buf.getvalue()
        assert "\x1b[1;31mstage B:" in output
        assert "bad input" in output

    def test_markup_in_text_is_not_interpreted(self):
        info, _ = _console(terminal=False)
        err, err_buf = _console(terminal=False)
        show(error("[bold]not markup[/bold]"), sink=ConsoleSink(info, err))
        assert err_buf.getvalue() == "[bold]not markup[/bold]\n"


class TestStyledLine:
    def test_header_style(self):
        text = styled_line(MessageLine(0, "stage:", LineKind.HEADER))
        assert text.plain == "stage:"
        assert text.spans[-1].style == "folio.header"

    def test_bullet_styled_separately(self):
        text = styled_line(MessageLine(2, "leaf", LineKind.LEAF))
        assert text.plain == "  - leaf"
        styles = [span.style for span in text.spans]
        assert styles == ["folio.bullet", "folio.error"]
