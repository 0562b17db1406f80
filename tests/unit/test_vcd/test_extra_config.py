# SPDX-License-Identifier: LGPL-3.0-or-later
"""get / set / delete operations against a resolved VM."""
from __future__ import annotations

import io

import pytest

from fakes.fake_backend import FakeBackend, make_tree
from vcd_extraconfig.vcd.exceptions import (
    ExtraConfigDeleteError,
    ExtraConfigFetchError,
    ExtraConfigSetError,
    HardwareFetchError,
)
from vcd_extraconfig.vcd.extra_config import (
    delete_extra_config,
    format_extra_config,
    format_hardware,
    get_vm_info,
    set_extra_config,
)
from vcd_extraconfig.vcd.resolver import resolve_vm


def _resolved(extra=None, fail=None):
    backend = FakeBackend(make_tree(extra), fail=fail)
    vm = resolve_vm(backend, "Org1", "Vdc1", "App1", "VM1")
    backend.calls.clear()
    return backend, vm


@pytest.mark.unit
class TestGetVmInfo:
    def test_reads_hardware_then_extra_config(self):
        backend, vm = _resolved({"guestinfo.a": "1", "guestinfo.b": "2"})

        info = get_vm_info(backend, vm)

        assert backend.call_names() == ["get_hardware_items", "get_extra_config"]
        assert info.name == "VM1"
        assert [h.quantity for h in info.cpu_memory_items()] == [2, 4096]
        assert info.extra_config_dict() == {"guestinfo.a": "1", "guestinfo.b": "2"}

    def test_renders_output(self):
        backend, vm = _resolved({"guestinfo.a": "1"})
        out = io.StringIO()

        get_vm_info(backend, vm, out=out)

        assert out.getvalue().splitlines() == [
            "VM Name: VM1",
            "CPU: 2",
            "Memory: 4096 MB",
            "ExtraConfig:",
            "  guestinfo.a: 1",
        ]

    def test_hardware_failure_skips_extra_config(self):
        backend, vm = _resolved(fail={"get_hardware_items": "boom"})
        out = io.StringIO()

        with pytest.raises(HardwareFetchError):
            get_vm_info(backend, vm, out=out)

        assert backend.call_names() == ["get_hardware_items"]
        assert out.getvalue() == ""

    def test_extra_config_failure_leaves_hardware_output(self):
        backend, vm = _resolved(fail={"get_extra_config": "timeout"})
        out = io.StringIO()

        with pytest.raises(ExtraConfigFetchError) as ei:
            get_vm_info(backend, vm, out=out)

        assert "timeout" in ei.value.detail()
        assert out.getvalue().splitlines() == ["VM Name: VM1", "CPU: 2", "Memory: 4096 MB"]

    def test_format_helpers_skip_other_resource_types(self):
        backend, vm = _resolved()

        lines = format_hardware("VM1", backend.get_hardware_items(vm))

        assert lines == ["VM Name: VM1", "CPU: 2", "Memory: 4096 MB"]
        assert format_extra_config([]) == ["ExtraConfig:"]


@pytest.mark.unit
class TestSetExtraConfig:
    def test_single_entry_upsert(self):
        backend, vm = _resolved({"guestinfo.foo": "old"})

        set_extra_config(backend, vm, "guestinfo.foo", "bar")

        assert len(backend.calls) == 1
        name, vm_name, entries = backend.calls[0]
        assert name == "update_extra_config"
        assert [(e.key, e.value) for e in entries] == [("guestinfo.foo", "bar")]

    def test_set_then_get_returns_value(self):
        backend, vm = _resolved()

        set_extra_config(backend, vm, "guestinfo.foo", "bar")
        info = get_vm_info(backend, vm)

        assert info.extra_config_dict()["guestinfo.foo"] == "bar"

    def test_remote_failure(self):
        backend, vm = _resolved(fail={"update_extra_config": "403 Forbidden"})

        with pytest.raises(ExtraConfigSetError) as ei:
            set_extra_config(backend, vm, "k", "v")

        assert ei.value.detail() == "error setting extra config: 403 Forbidden"


@pytest.mark.unit
class TestDeleteExtraConfig:
    def test_single_key_delete(self):
        backend, vm = _resolved({"guestinfo.foo": "bar", "keep": "me"})

        delete_extra_config(backend, vm, "guestinfo.foo")

        name, _vm, entries = backend.calls[0]
        assert name == "delete_extra_config"
        assert [e.key for e in entries] == ["guestinfo.foo"]

    def test_delete_then_get_omits_key(self):
        backend, vm = _resolved({"guestinfo.foo": "bar", "keep": "me"})

        delete_extra_config(backend, vm, "guestinfo.foo")
        info = get_vm_info(backend, vm)

        assert info.extra_config_dict() == {"keep": "me"}

    def test_missing_key_is_an_error(self):
        backend, vm = _resolved({"keep": "me"})

        with pytest.raises(ExtraConfigDeleteError) as ei:
            delete_extra_config(backend, vm, "guestinfo.absent")

        assert "guestinfo.absent" in ei.value.detail()
