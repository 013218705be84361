# =============================================================================
# PORT SPEC PARSER TESTS
# =============================================================================
# Tests for exposed-port extraction from image metadata.
# =============================================================================

from unittest.mock import MagicMock, patch

from src.core.ports import exposed_ports, parse_ports


def _image(config=None, container_config=None, name="sha256:abc"):
    metadata = {}
    if config is not None:
        metadata["Config"] = {"ExposedPorts": config}
    if container_config is not None:
        metadata["ContainerConfig"] = {"ExposedPorts": container_config}
    return {"metadata": {"name": name}, "dockerImageMetadata": metadata}


class TestExposedPorts:
    """Test metadata path lookup."""

    def test_config_path_first(self):
        image = _image(config={"80/tcp": {}}, container_config={"81/tcp": {}})
        assert exposed_ports(image) == {"80/tcp": {}}

    def test_falls_back_to_container_config(self):
        image = _image(container_config={"81/tcp": {}})
        assert exposed_ports(image) == {"81/tcp": {}}

    def test_empty_config_falls_back(self):
        image = _image(config={}, container_config={"81/tcp": {}})
        assert exposed_ports(image) == {"81/tcp": {}}

    def test_missing_metadata(self):
        assert exposed_ports({}) == {}
        assert exposed_ports(None) == {}
        assert exposed_ports({"dockerImageMetadata": {"Config": None}}) == {}


class TestParsePorts:
    """Test parse_ports."""

    def test_default_protocol_and_order(self):
        """Ports are sorted and the protocol defaults to TCP."""
        ports = parse_ports(_image(config={"9090": {}, "8080/tcp": {}}), warn=MagicMock())
        assert [p.model_dump(by_alias=True) for p in ports] == [
            {"containerPort": 8080, "protocol": "TCP"},
            {"containerPort": 9090, "protocol": "TCP"},
        ]

    def test_protocol_upper_cased(self):
        ports = parse_ports(_image(config={"53/udp": {}}), warn=MagicMock())
        assert ports[0].protocol == "UDP"

    def test_non_numeric_port_skipped(self):
        warn = MagicMock()
        ports = parse_ports(_image(config={"abc/tcp": {}}), warn=warn)

        assert ports == []
        warn.assert_called_once()
        message = warn.call_args[0][0]
        assert "abc" in message
        assert "sha256:abc" in message

    def test_bad_key_does_not_stop_parsing(self):
        warn = MagicMock()
        ports = parse_ports(
            _image(config={"8080/tcp": {}, "http/tcp": {}, "443": {}}), warn=warn
        )
        assert [p.container_port for p in ports] == [443, 8080]
        assert warn.call_count == 1

    def test_leading_digits_read_as_port(self):
        """Trailing garbage after the digits is ignored."""
        warn = MagicMock()
        ports = parse_ports(_image(config={"8080abc/tcp": {}, "1_000": {}}), warn=warn)
        assert [(p.container_port, p.protocol) for p in ports] == [(1, "TCP"), (8080, "TCP")]
        warn.assert_not_called()

    def test_non_ascii_digits_skipped(self):
        warn = MagicMock()
        assert parse_ports(_image(config={"\u0668\u0660": {}}), warn=warn) == []
        warn.assert_called_once()

    def test_zero_and_negative_ports_skipped(self):
        warn = MagicMock()
        ports = parse_ports(_image(config={"0/tcp": {}, "-80": {}, "+81": {}}), warn=warn)
        assert [p.container_port for p in ports] == [81]
        assert warn.call_count == 2

    def test_equal_ports_keep_input_order(self):
        ports = parse_ports(
            _image(config={"53/udp": {}, "80/tcp": {}, "53/tcp": {}}), warn=MagicMock()
        )
        assert [(p.container_port, p.protocol) for p in ports] == [
            (53, "UDP"), (53, "TCP"), (80, "TCP"),
        ]

    def test_duplicates_pass_through(self):
        ports = parse_ports(_image(config={"80": {}, "80/tcp": {}}), warn=MagicMock())
        assert len(ports) == 2

    def test_no_ports(self):
        assert parse_ports({}, warn=MagicMock()) == []

    def test_default_warn_prints_to_console(self):
        with patch("src.core.ports.console") as mock_console:
            parse_ports(_image(config={"x": {}}))
        mock_console.print.assert_called_once()
        assert "[PORTS]" in mock_console.print.call_args[0][0]
