"""Property-based tests for configuration loading.

Tests env var resolution and that validated configs always load.
"""

import os
from unittest.mock import patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blockbench_mcp.config import ConfigLoader, resolve_env_vars
from blockbench_mcp.errors import BlockbenchError
from blockbench_mcp.types import HostType, LogLevel, ToolStatus

valid_env_var_name = st.from_regex(r"^BBTEST_[A-Z0-9_]{1,12}$", fullmatch=True)
valid_env_var_value = st.from_regex(r"^[a-zA-Z0-9_\-./:]{1,40}$", fullmatch=True)


@pytest.mark.property
class TestEnvVarResolution:
    """Property tests for ${VAR} interpolation."""

    @given(valid_env_var_name, valid_env_var_value)
    @settings(max_examples=50)
    def test_set_var_is_substituted(self, var_name, var_value):
        with patch.dict(os.environ, {var_name: var_value}):
            assert resolve_env_vars(f"prefix-${{{var_name}}}") == f"prefix-{var_value}"

    @given(valid_env_var_name, valid_env_var_value)
    @settings(max_examples=50)
    def test_default_used_when_unset(self, var_name, default):
        with patch.dict(os.environ, {}, clear=True):
            assert resolve_env_vars(f"${{{var_name}:-{default}}}") == default

    @given(valid_env_var_name)
    @settings(max_examples=25)
    def test_custom_error_message(self, var_name):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(BlockbenchError) as exc_info:
                resolve_env_vars(f"${{{var_name}:?set the bridge url}}")
            assert exc_info.value.detail == "set the bridge url"

    @given(st.text(alphabet=st.characters(blacklist_characters="$"), max_size=50))
    def test_text_without_references_unchanged(self, text):
        assert resolve_env_vars(text) == text


@pytest.mark.property
class TestValidConfigsLoad:
    """Any config that passes validation converts cleanly."""

    @given(
        st.sampled_from([t.value for t in HostType]),
        st.floats(min_value=0.1, max_value=600),
        st.sampled_from([level.value for level in LogLevel]),
        st.lists(st.sampled_from([s.value for s in ToolStatus]), unique=True),
    )
    @settings(max_examples=50)
    def test_roundtrip_enums(self, host_type, timeout, level, statuses):
        config = ConfigLoader().load_from_dict(
            {
                "host": {"type": host_type, "timeout": timeout},
                "logging": {"level": level},
                "tools": {"enabled_statuses": statuses},
            }
        )
        assert config.host.type == HostType(host_type)
        assert config.host.timeout == timeout
        assert config.logging.level == LogLevel(level)
        assert config.tools.enabled_statuses == [ToolStatus(s) for s in statuses]

    @given(st.one_of(st.integers(max_value=0), st.text(max_size=5), st.booleans()))
    @settings(max_examples=50)
    def test_bad_timeouts_rejected(self, timeout):
        result = ConfigLoader().validate({"host": {"timeout": timeout}})
        assert not result.valid
