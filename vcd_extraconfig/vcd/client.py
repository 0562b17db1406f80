# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vcd_extraconfig/vcd/client.py
"""
Cloud Director session client built on pyvcloud.

pyvcloud has no dedicated extra-config API, so ExtraConfig entries are read
from and written to the VM's OVF virtualHardwareSection, where Cloud Director
exposes them as `vmw:ExtraConfig` elements next to the hardware `ovf:Item`s.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import urlsplit

import requests
import urllib3
from lxml import etree
from pyvcloud.vcd.client import BasicLoginCredentials, Client
from pyvcloud.vcd.exceptions import EntityNotFoundException, SDKException, VcdException
from pyvcloud.vcd.org import Org
from pyvcloud.vcd.vapp import VApp
from pyvcloud.vcd.vdc import VDC

from ..config.config_loader import VcdConfig
from ..core.logger import Log
from .backend import VcdBackend
from .exceptions import InvalidURL, wrap_auth_error, wrap_vcd_api_error
from .models import ExtraConfigEntry, HardwareItem

OVF_NS = "http://schemas.dmtf.org/ovf/envelope/1"
RASD_NS = "http://schemas.dmtf.org/wbem/wscim/1/cim-schema/2/CIM_ResourceAllocationSettingData"
VMW_NS = "http://www.vmware.com/schema/ovf"

VIRTUAL_HARDWARE_SECTION_MEDIA_TYPE = "application/vnd.vmware.vcloud.virtualHardwareSection+xml"

_ITEM = f"{{{OVF_NS}}}Item"
_EXTRA_CONFIG = f"{{{VMW_NS}}}ExtraConfig"
_EC_KEY = f"{{{VMW_NS}}}key"
_EC_VALUE = f"{{{VMW_NS}}}value"
_OVF_REQUIRED = f"{{{OVF_NS}}}required"

# pyvcloud has two exception trees: VcdException for API error responses and
# SDKException for client-side failures (task timeouts, session and access
# errors). Transport failures (DNS, TLS, timeouts) come straight from requests.
REMOTE_ERRORS = (VcdException, SDKException, requests.exceptions.RequestException)


def parse_base_url(url: str) -> str:
    """
    Validate an absolute http(s) URL and return `scheme://host[:port]`.

    The configured URL usually ends in `/api`; pyvcloud appends that itself.
    """
    raw = (url or "").strip()
    try:
        parts = urlsplit(raw)
        # Accessing .port validates it.
        _ = parts.port
    except ValueError as e:
        raise InvalidURL(msg=f"invalid URL {raw!r}", cause=e)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidURL(msg=f"invalid URL {raw!r}: expected an absolute http(s) URL")
    return f"{parts.scheme}://{parts.netloc}"


def _text(el: Any, tag: str) -> str:
    child = el.find(tag)
    if child is None or child.text is None:
        return ""
    return str(child.text).strip()


def _int(s: str) -> int:
    try:
        return int(s)
    except (TypeError, ValueError):
        return 0


def parse_hardware_items(section: Any) -> List[HardwareItem]:
    items: List[HardwareItem] = []
    for item in section.findall(_ITEM):
        items.append(
            HardwareItem(
                resource_type=_int(_text(item, f"{{{RASD_NS}}}ResourceType")),
                name=_text(item, f"{{{RASD_NS}}}ElementName"),
                quantity=_int(_text(item, f"{{{RASD_NS}}}VirtualQuantity")),
                units=_text(item, f"{{{RASD_NS}}}AllocationUnits"),
            )
        )
    return items


def parse_extra_config(section: Any) -> List[ExtraConfigEntry]:
    return [
        ExtraConfigEntry(key=el.get(_EC_KEY, ""), value=el.get(_EC_VALUE, ""))
        for el in section.findall(_EXTRA_CONFIG)
    ]


def upsert_extra_config(section: Any, entries: Sequence[ExtraConfigEntry]) -> None:
    """Overwrite matching vmw:ExtraConfig elements in place, append the rest."""
    existing = {el.get(_EC_KEY): el for el in section.findall(_EXTRA_CONFIG)}
    for entry in entries:
        el = existing.get(entry.key)
        if el is None:
            el = etree.Element(_EXTRA_CONFIG)
            el.set(_OVF_REQUIRED, "false")
            el.set(_EC_KEY, entry.key)
            _insert_after_last(section, el)
            existing[entry.key] = el
        el.set(_EC_VALUE, entry.value)


def remove_extra_config(section: Any, entries: Sequence[ExtraConfigEntry]) -> List[str]:
    """Drop matching vmw:ExtraConfig elements; return the keys that were absent."""
    existing = {el.get(_EC_KEY): el for el in section.findall(_EXTRA_CONFIG)}
    missing: List[str] = []
    for entry in entries:
        el = existing.pop(entry.key, None)
        if el is None:
            missing.append(entry.key)
            continue
        el.getparent().remove(el)
    return missing


def _insert_after_last(section: Any, el: Any) -> None:
    # Keep ExtraConfig grouped after the hardware Items and before trailing Links.
    anchors = section.findall(_EXTRA_CONFIG) or section.findall(_ITEM)
    if anchors:
        anchors[-1].addnext(el)
    else:
        section.append(el)


class VcdClient(VcdBackend):
    """
    pyvcloud-backed session. Use `VcdClient.connect(config)` to obtain an
    authenticated instance; `close()` logs out.
    """

    def __init__(self, logger: logging.Logger, client: Client) -> None:
        self.logger = logger
        self.client = client
        self._closed = False

    @classmethod
    def connect(cls, config: VcdConfig, logger: Optional[logging.Logger] = None) -> "VcdClient":
        log = logger or logging.getLogger(__name__)
        base = parse_base_url(config.url)

        verify = not config.insecure
        if not verify:
            Log.warn(
                log,
                "TLS certificate verification is DISABLED. "
                "Only use this against endpoints with self-signed certificates you trust.",
                host=base,
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        try:
            client = Client(base, api_version=config.api or None, verify_ssl_certs=verify)
            if not config.api:
                client.set_highest_supported_version()
            client.set_credentials(
                BasicLoginCredentials(user=config.user, org=config.org, password=config.resolved_password())
            )
        except REMOTE_ERRORS as e:
            raise wrap_auth_error(
                f"authentication to {base} failed", e, host=base, org=config.org, user=config.user
            )

        log.info("Connected to Cloud Director: %s (org=%s, api=%s)", base, config.org, config.api or "auto")
        return cls(log, client)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.client.logout()
            self.logger.debug("Logged out")
        except REMOTE_ERRORS as e:
            self.logger.error("Error during logout: %s", e)

    # Resolution

    def get_org(self, name: str) -> Optional[Any]:
        try:
            resource = self.client.get_org_by_name(name)
        except EntityNotFoundException:
            return None
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error(f"org lookup failed for {name!r}", e)
        return Org(self.client, resource=resource)

    def get_vdc(self, org: Org, name: str) -> Optional[Any]:
        try:
            resource = org.get_vdc(name)
        except EntityNotFoundException:
            return None
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error(f"vdc lookup failed for {name!r}", e)
        if resource is None:
            return None
        return VDC(self.client, resource=resource)

    def get_vapp(self, vdc: VDC, name: str) -> Optional[Any]:
        try:
            resource = vdc.get_vapp(name)
        except EntityNotFoundException:
            return None
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error(f"vApp lookup failed for {name!r}", e)
        return VApp(self.client, resource=resource)

    def get_vm(self, vapp: VApp, name: str) -> Optional[Any]:
        try:
            return vapp.get_vm(name)
        except EntityNotFoundException:
            return None
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error(f"VM lookup failed for {name!r}", e)

    def vm_name(self, vm: Any) -> str:
        return str(vm.get("name", ""))

    # Extra configuration

    def _section_href(self, vm: Any) -> str:
        return f"{str(vm.get('href')).rstrip('/')}/virtualHardwareSection/"

    def _get_section(self, vm: Any) -> Any:
        return self.client.get_resource(self._section_href(vm))

    def _put_section(self, vm: Any, section: Any) -> None:
        task = self.client.put_resource(self._section_href(vm), section, VIRTUAL_HARDWARE_SECTION_MEDIA_TYPE)
        self.client.get_task_monitor().wait_for_success(task=task)

    def get_hardware_items(self, vm: Any) -> List[HardwareItem]:
        try:
            section = self._get_section(vm)
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error("cannot read virtual hardware section", e, vm=self.vm_name(vm))
        return parse_hardware_items(section)

    def get_extra_config(self, vm: Any) -> List[ExtraConfigEntry]:
        try:
            section = self._get_section(vm)
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error("cannot read extra config", e, vm=self.vm_name(vm))
        return parse_extra_config(section)

    def update_extra_config(self, vm: Any, entries: Sequence[ExtraConfigEntry]) -> None:
        try:
            section = self._get_section(vm)
            upsert_extra_config(section, entries)
            self._put_section(vm, section)
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error("cannot update extra config", e, vm=self.vm_name(vm))

    def delete_extra_config(self, vm: Any, entries: Sequence[ExtraConfigEntry]) -> None:
        try:
            section = self._get_section(vm)
            missing = remove_extra_config(section, entries)
            if missing:
                raise wrap_vcd_api_error(
                    f"extra config key not found: {', '.join(missing)}", vm=self.vm_name(vm)
                )
            self._put_section(vm, section)
        except REMOTE_ERRORS as e:
            raise wrap_vcd_api_error("cannot delete extra config", e, vm=self.vm_name(vm))


def open_session(config: VcdConfig, logger: Optional[logging.Logger] = None) -> VcdBackend:
    return VcdClient.connect(config, logger)
