"""
Smart device control

State machine over device status {on, off, unknown}:
    on / off  -> unconditional transition
    toggle    -> on->off, off->on, unknown->on
Every successful control call and every confirmed lockdown writes to the
security log.
"""

import logging
from typing import Any, Dict, Optional

from jarvis.models import DeviceAction, DeviceStatus, LockdownResult, Settings, SmartDevice
from jarvis.security_log import SecurityLog
from jarvis.store import EntityStore

logger = logging.getLogger(__name__)

LOCKDOWN_SETTINGS = {
    "lock": {"locked": True},
    "camera": {"recording": True, "motion_detection": True},
}


def next_status(current: DeviceStatus, action: DeviceAction) -> DeviceStatus:
    if action == "toggle":
        return "off" if current == "on" else "on"
    return action


class DeviceController:
    def __init__(self, devices: EntityStore[SmartDevice], security_log: SecurityLog):
        self.devices = devices
        self.security_log = security_log

    def control(self, device_id: str, action: DeviceAction, settings: Optional[Settings] = None) -> SmartDevice:
        """
        Apply an action and an optional settings patch to a device

        Settings are merged into the existing ones; keys not mentioned keep
        their values.

        Raises:
            NotFoundError: no device with device_id
        """
        def transition(device: SmartDevice) -> Dict[str, Any]:
            partial: Dict[str, Any] = {"status": next_status(device.status, action)}
            if settings:
                partial["settings"] = dict(settings)
            return partial

        device, updated = self.devices.update_with(device_id, transition)
        logger.info(f"Device {device_id}: {device.status} -> {updated.status} ({action})")
        self.security_log.append(f"Device {updated.name} {action}", "info", "smart_home")
        return updated

    def lockdown(self, confirm: bool) -> LockdownResult:
        """
        Lock every lock and arm every camera

        Without confirmation nothing is touched and no log entry is written.
        """
        if not confirm:
            logger.info("Lockdown requested without confirmation; ignoring")
            return LockdownResult(confirmed=False)

        counts = {"lock": 0, "camera": 0}
        for device in self.devices.list(lambda d: d.type in LOCKDOWN_SETTINGS):
            self.devices.update(device.id, {"status": "on", "settings": LOCKDOWN_SETTINGS[device.type]})
            counts[device.type] += 1

        entry = self.security_log.append("Security lockdown initiated", "alert", "security_system")
        logger.warning(f"Security lockdown: {counts['lock']} locks secured, {counts['camera']} cameras activated")
        return LockdownResult(
            confirmed=True,
            locks_secured=counts["lock"],
            cameras_activated=counts["camera"],
            log_entry=entry,
        )
