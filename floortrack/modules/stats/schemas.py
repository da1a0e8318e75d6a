from floortrack.core.schemas import CamelModel
from typing import List


class APDeviceCount(CamelModel):
    ap_id: str
    title: str
    cx: float
    cy: float
    device_count: int


class DevicesByAPResponse(CamelModel):
    floor_id: str
    aps: List[APDeviceCount]


class TotalDevicesResponse(CamelModel):
    total_devices: int


class TotalAPsResponse(CamelModel):
    total_aps: int
