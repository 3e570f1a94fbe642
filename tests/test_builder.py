# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for GELF message assembly."""

import logging
import socket
from unittest.mock import patch

from copilot_gelf import context
from copilot_gelf.builder import (
    FUNCTION_NAME_FIELD,
    INSTANCE_FIELD,
    LOGGER_NAME_FIELD,
    GelfMessageBuilder,
)
from copilot_gelf.config import GelfConfig
from copilot_gelf.error_reporter import ErrorCode
from copilot_gelf.renderer import MessageRenderer


def _build(record, config=None, reporter=None):
    builder = GelfMessageBuilder(config or GelfConfig(origin_host="test-host"), reporter)
    return builder.build(record, MessageRenderer().render(record))


class TestGelfMessageBuilder:
    """Tests for GelfMessageBuilder."""

    def test_core_attributes(self, make_record):
        """Test text, level and timestamp."""
        record = make_record("disk full", level=logging.ERROR, created=1_700_000_000.5)

        message = _build(record)

        assert message.short_message == "disk full"
        assert message.full_message == "disk full"
        assert message.level == 3
        assert message.timestamp_millis == 1_700_000_000_500

    def test_logger_and_function_fields_always_set(self, make_record):
        """Test that component and call-site fields are always present."""
        record = make_record(name="parsing.worker", func="process")

        message = _build(record)

        assert message.fields[LOGGER_NAME_FIELD] == "parsing.worker"
        assert message.fields[FUNCTION_NAME_FIELD] == "process"

    def test_missing_function_name_is_empty_string(self, make_record):
        """Test that an absent call-site becomes an empty field, not a missing one."""
        record = make_record(func=None)

        message = _build(record)

        assert message.fields[FUNCTION_NAME_FIELD] == ""

    def test_origin_host_override(self, make_record):
        """Test that a configured origin host is used."""
        message = _build(make_record(), GelfConfig(origin_host="api-7"))

        assert message.host == "api-7"

    def test_local_hostname_resolved_once(self, make_record):
        """Test that the local hostname is looked up once and cached."""
        builder = GelfMessageBuilder(GelfConfig())
        renderer = MessageRenderer()

        with patch("copilot_gelf.builder.socket.gethostname", return_value="node-3") as gethostname:
            first = builder.build(make_record(), renderer.render(make_record()))
            second = builder.build(make_record(), renderer.render(make_record()))

        assert first.host == "node-3"
        assert second.host == "node-3"
        assert gethostname.call_count == 1

    def test_hostname_failure_reported_once(self, make_record, reporter):
        """Test that a hostname failure is reported once and the host omitted."""
        builder = GelfMessageBuilder(GelfConfig(), reporter)
        renderer = MessageRenderer()

        with patch("copilot_gelf.builder.socket.gethostname", side_effect=socket.error("no name")):
            first = builder.build(make_record(), renderer.render(make_record()))
            second = builder.build(make_record(), renderer.render(make_record()))

        assert first.host is None
        assert second.host is None
        errors = reporter.get_errors(ErrorCode.GENERIC_FAILURE)
        assert len(errors) == 1
        assert "local hostname" in errors[0]["message"]
        assert "host" not in first.to_dict()

    def test_facility_only_when_configured(self, make_record):
        """Test that facility is optional."""
        assert _build(make_record()).facility is None

        config = GelfConfig(origin_host="h", facility="reporting")
        assert _build(make_record(), config).facility == "reporting"

    def test_instance_name_field(self, make_record):
        """Test that the instance name is added when configured."""
        assert INSTANCE_FIELD not in _build(make_record()).fields

        config = GelfConfig(origin_host="h", instance_name="staging-2")
        assert _build(make_record(), config).fields[INSTANCE_FIELD] == "staging-2"

    def test_diagnostic_value_from_record_extra(self, make_record):
        """Test that the tag is read from the record's extra attributes."""
        record = make_record(remoteAddr="203.0.113.5")

        message = _build(record)

        assert message.fields["remoteAddr"] == "203.0.113.5"

    def test_diagnostic_value_from_context(self, make_record):
        """Test that the tag is read from the diagnostic context."""
        with context.diagnostic_context(remoteAddr="198.51.100.7"):
            message = _build(make_record())

        assert message.fields["remoteAddr"] == "198.51.100.7"

    def test_diagnostic_value_absent(self, make_record):
        """Test that the field is omitted when the tag is not present."""
        message = _build(make_record())

        assert "remoteAddr" not in message.fields

    def test_custom_diagnostic_tag(self, make_record):
        """Test a non-default diagnostic tag."""
        config = GelfConfig(origin_host="h", mdc_tag="requestId")
        record = make_record(requestId="req-123", remoteAddr="203.0.113.5")

        message = _build(record, config)

        assert message.fields["requestId"] == "req-123"
        assert "remoteAddr" not in message.fields

    def test_additional_fields_applied_last(self, make_record):
        """Test that static fields are added and win on collisions."""
        config = GelfConfig(
            origin_host="h",
            additional_fields={"environment": "prod", LOGGER_NAME_FIELD: "overridden"},
        )

        message = _build(make_record(name="original"), config)

        assert message.fields["environment"] == "prod"
        assert message.fields[LOGGER_NAME_FIELD] == "overridden"
