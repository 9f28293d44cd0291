"""Tests for the udock error taxonomy."""

from __future__ import annotations

import pytest

from udock.shared.exceptions import (
    ClientConstructionFailed,
    ConnectivityFailed,
    ContainerCreationFailed,
    ContainerStartFailed,
    ImageListingFailed,
    ImageNotPresent,
    ImagePullFailed,
    ImageStreamReadFailed,
    OperationTimedOut,
    PortMappingInvalid,
    UdockError,
)

ALL_KINDS = [
    ClientConstructionFailed(),
    ConnectivityFailed(),
    ImageListingFailed("a:b"),
    ImageNotPresent("a:b"),
    ImagePullFailed("a:b"),
    ImageStreamReadFailed("a:b"),
    ContainerCreationFailed("a:b", "name"),
    ContainerStartFailed("abc"),
    OperationTimedOut("op", 1.0),
    PortMappingInvalid("x", "bad"),
]


@pytest.mark.parametrize("error", ALL_KINDS, ids=lambda e: type(e).__name__)
def test_every_kind_is_a_udock_error(error: UdockError) -> None:
    assert isinstance(error, UdockError)


def test_kinds_are_distinct() -> None:
    kinds = [type(error) for error in ALL_KINDS]
    for kind in kinds:
        assert [other for other in kinds if issubclass(other, kind)] == [kind]


def test_not_present_carries_reference() -> None:
    error = ImageNotPresent("some/madeup:image")

    assert error.image_ref == "some/madeup:image"
    assert "some/madeup:image" in str(error)


def test_creation_failure_carries_diagnostics() -> None:
    error = ContainerCreationFailed("hashicorp/http-echo:latest", None)

    assert error.name is None
    assert "<unnamed>" in str(error)
    assert "hashicorp/http-echo:latest" in str(error)


def test_wrapping_preserves_cause() -> None:
    cause = ConnectionRefusedError("refused")

    with pytest.raises(ConnectivityFailed) as excinfo:
        try:
            raise cause
        except ConnectionRefusedError as exc:
            raise ConnectivityFailed() from exc

    assert excinfo.value.__cause__ is cause
