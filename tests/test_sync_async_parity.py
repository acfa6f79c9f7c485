"""Sync/Async API parity tests.

Validates that the sync and async clients expose the same methods with
matching signatures.
"""

import inspect
from collections.abc import Callable
from typing import Any

import pytest

from boxcontent import (
    AsyncBoxClient,
    AsyncFilesClient,
    AsyncUsersClient,
    BoxClient,
    FilesClient,
    UsersClient,
)


def get_param_names(func: Callable) -> list[str]:
    """Extract parameter names from a function signature."""
    sig = inspect.signature(func)
    return [
        name
        for name, param in sig.parameters.items()
        if param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def get_param_defaults(func: Callable) -> dict[str, Any]:
    """Extract parameter defaults from a function signature."""
    sig = inspect.signature(func)
    return {
        name: param.default
        for name, param in sig.parameters.items()
        if param.default is not inspect.Parameter.empty
    }


def compare_signatures(sync_func: Callable, async_func: Callable) -> list[str]:
    """Compare signatures of sync and async functions.

    Returns a list of differences (empty if signatures match).
    """
    differences = []

    sync_params = get_param_names(sync_func)
    async_params = get_param_names(async_func)

    if sync_params != async_params:
        differences.append(f"Parameter names differ: sync={sync_params}, async={async_params}")

    sync_defaults = get_param_defaults(sync_func)
    async_defaults = get_param_defaults(async_func)

    for name in set(sync_defaults.keys()) & set(async_defaults.keys()):
        if sync_defaults[name] != async_defaults[name]:
            differences.append(
                f"Default for '{name}' differs: "
                f"sync={sync_defaults[name]}, async={async_defaults[name]}"
            )

    return differences


def public_methods(cls: type) -> set[str]:
    return {
        name
        for name, member in inspect.getmembers(cls, inspect.isfunction)
        if not name.startswith("_")
    }


CLIENT_PAIRS = [
    (FilesClient, AsyncFilesClient),
    (UsersClient, AsyncUsersClient),
    (BoxClient, AsyncBoxClient),
]


class TestClientParity:
    @pytest.mark.parametrize("sync_cls,async_cls", CLIENT_PAIRS)
    def test_same_public_methods(self, sync_cls, async_cls):
        assert public_methods(sync_cls) == public_methods(async_cls)

    @pytest.mark.parametrize("sync_cls,async_cls", CLIENT_PAIRS)
    def test_signatures_match(self, sync_cls, async_cls):
        for name in public_methods(sync_cls):
            differences = compare_signatures(getattr(sync_cls, name), getattr(async_cls, name))
            assert not differences, f"{sync_cls.__name__}.{name}: {differences}"

    @pytest.mark.parametrize("sync_cls,async_cls", CLIENT_PAIRS)
    def test_async_methods_are_coroutines(self, sync_cls, async_cls):
        for name in public_methods(async_cls):
            assert inspect.iscoroutinefunction(getattr(async_cls, name)), name
            assert not inspect.iscoroutinefunction(getattr(sync_cls, name)), name

    def test_constructors_match(self):
        assert not compare_signatures(BoxClient.__init__, AsyncBoxClient.__init__)
