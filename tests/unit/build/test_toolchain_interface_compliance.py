"""
Unit tests for toolchain interface compliance.

The orchestrator and dependency builder only call the IToolchain methods, so
every implementation (including the recording fake used by the tests) must
accept the same parameters.
"""

import inspect

import pytest

from cork.build.toolchain import GccToolchain, IToolchain

ALL_TOOLCHAINS = [GccToolchain]


def _parameter_names(method):
    return list(inspect.signature(method).parameters)


class TestToolchainInterface:
    """Test that all toolchains implement the IToolchain interface."""

    def test_interface_methods_are_abstract(self):
        assert IToolchain.__abstractmethods__ == frozenset({"compile", "link"})
        with pytest.raises(TypeError):
            IToolchain()  # type: ignore[abstract]

    @pytest.mark.parametrize("toolchain_class", ALL_TOOLCHAINS, ids=lambda cls: cls.__name__)
    def test_is_a_toolchain(self, toolchain_class):
        assert issubclass(toolchain_class, IToolchain)
        assert not inspect.isabstract(toolchain_class)

    @pytest.mark.parametrize("toolchain_class", ALL_TOOLCHAINS, ids=lambda cls: cls.__name__)
    def test_compile_signature(self, toolchain_class):
        assert _parameter_names(toolchain_class.compile) == _parameter_names(IToolchain.compile)

    @pytest.mark.parametrize("toolchain_class", ALL_TOOLCHAINS, ids=lambda cls: cls.__name__)
    def test_link_signature(self, toolchain_class):
        assert _parameter_names(toolchain_class.link) == _parameter_names(IToolchain.link)

    def test_recording_toolchain_matches_interface(self, toolchain):
        """The fake used throughout the build tests must stay in step with IToolchain."""
        fake_class = type(toolchain)
        assert issubclass(fake_class, IToolchain)
        assert _parameter_names(fake_class.compile) == _parameter_names(IToolchain.compile)
        assert _parameter_names(fake_class.link) == _parameter_names(IToolchain.link)
