"""Tests for the port mapping translator."""

from __future__ import annotations

import pytest

from udock.runtime.ports import container_port_token, translate_port_bindings
from udock.shared.exceptions import PortMappingInvalid, UdockError
from udock.shared.models import PortBinding


class TestContainerPortToken:
    def test_tcp_qualified(self) -> None:
        assert container_port_token("5678") == "5678/tcp"

    def test_leading_zeros_normalised(self) -> None:
        assert container_port_token("080") == "80/tcp"

    @pytest.mark.parametrize("raw", ["abc", "", " 80", "80/udp", "-1", "0", "65536", "8000-8010", "٨٠"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(PortMappingInvalid) as excinfo:
            container_port_token(raw)
        assert excinfo.value.port == raw


class TestTranslatePortBindings:
    def test_single_binding(self) -> None:
        result = translate_port_bindings({"32768": "5678"})

        assert result == {"5678/tcp": [PortBinding(host_ip="0.0.0.0", host_port="32768")]}

    def test_multiple_bindings(self) -> None:
        result = translate_port_bindings({"8080": "80", "8443": "443"})

        assert set(result) == {"80/tcp", "443/tcp"}
        assert all(len(bindings) == 1 for bindings in result.values())
        assert result["443/tcp"][0].host_port == "8443"

    def test_empty_map(self) -> None:
        assert translate_port_bindings({}) == {}

    def test_host_port_zero_allowed(self) -> None:
        result = translate_port_bindings({"0": "5678"})
        assert result["5678/tcp"][0].host_port == "0"

    def test_invalid_container_port(self) -> None:
        with pytest.raises(PortMappingInvalid, match="abc"):
            translate_port_bindings({"8080": "abc"})

    def test_invalid_host_port(self) -> None:
        with pytest.raises(PortMappingInvalid, match="http"):
            translate_port_bindings({"http": "80"})

    def test_one_bad_entry_aborts_translation(self) -> None:
        with pytest.raises(PortMappingInvalid):
            translate_port_bindings({"8080": "80", "8081": "99999"})

    def test_container_port_bound_twice(self) -> None:
        with pytest.raises(PortMappingInvalid, match="more than one host port"):
            translate_port_bindings({"8080": "80", "8081": "80"})

    def test_error_is_domain_and_value_error(self) -> None:
        with pytest.raises(PortMappingInvalid) as excinfo:
            translate_port_bindings({"8080": "x"})
        assert isinstance(excinfo.value, UdockError)
        assert isinstance(excinfo.value, ValueError)
