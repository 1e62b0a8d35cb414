"""Unit tests for BBLogger."""

import io
import json

from blockbench_mcp.logging import BBLogger, LogConfig
from blockbench_mcp.types import LogFormat, LogLevel


def make_logger(**overrides) -> tuple[BBLogger, io.StringIO]:
    output = io.StringIO()
    config = LogConfig(output=output, **overrides)
    return BBLogger(config), output


class TestBBLogger:
    """Tests for level, component and format handling."""

    def test_below_level_is_dropped(self):
        logger, output = make_logger(level=LogLevel.WARN)
        logger.info("registry", "hidden")
        logger.warning("registry", "shown")
        assert "hidden" not in output.getvalue()
        assert "shown" in output.getvalue()

    def test_disabled_component_is_dropped(self):
        logger, output = make_logger(components={"resolver": False, "tool": True})
        logger.info("resolver", "quiet")
        logger.info("tool", "loud")
        assert "quiet" not in output.getvalue()
        assert "loud" in output.getvalue()

    def test_json_format(self):
        logger, output = make_logger(format=LogFormat.JSON)
        logger.info("host", "Project created", uuid="u-1")
        entry = json.loads(output.getvalue())
        assert entry["level"] == "INFO"
        assert entry["component"] == "host"
        assert entry["message"] == "Project created"
        assert entry["uuid"] == "u-1"
        assert entry["timestamp"].endswith("Z")

    def test_colored_format_tags_component(self):
        logger, output = make_logger()
        logger.error("frontend", "broken pipe")
        assert "[FRONTEND]" in output.getvalue()

    def test_context_is_truncated(self):
        logger, output = make_logger(truncate_at=10)
        logger.info("tool", "big", payload="x" * 100)
        assert "..." in output.getvalue()
        assert "x" * 50 not in output.getvalue()


class TestToolLogger:
    """Tests for per-invocation logging."""

    def test_calling_and_result(self):
        logger, output = make_logger(format=LogFormat.JSON)
        tool_log = logger.tool("list_formats")
        tool_log.calling({"pretty": True})
        tool_log.result("# Available Blockbench Formats", 12)

        lines = [json.loads(line) for line in output.getvalue().splitlines()]
        assert lines[0]["event"] == "tool_calling"
        assert lines[0]["params"] == {"pretty": True}
        assert lines[1]["event"] == "tool_result"
        assert lines[1]["duration_ms"] == 12

    def test_result_hidden_when_show_results_off(self):
        logger, output = make_logger(format=LogFormat.JSON, show_results=False)
        logger.tool("to_geo_json").result("{}", 1)
        assert "result" not in json.loads(output.getvalue())

    def test_error_records_type(self):
        logger, output = make_logger(format=LogFormat.JSON)
        logger.tool("open_project").error(ValueError("bad"), 5)
        entry = json.loads(output.getvalue())
        assert entry["level"] == "ERROR"
        assert entry["error_type"] == "ValueError"

    def test_warning_level(self):
        logger, output = make_logger(format=LogFormat.JSON)
        logger.tool("export_geo_json").warning("not Bedrock-compatible")
        entry = json.loads(output.getvalue())
        assert entry["level"] == "WARN"
        assert "not Bedrock-compatible" in entry["message"]
