from collections import Counter
from supabase import Client
from floortrack.modules.stats.schemas import APDeviceCount, DevicesByAPResponse
from floortrack.core.errors import store_error


class StatsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def devices_by_ap(self, floor_id: int) -> DevicesByAPResponse:
        """APs of a floor with the number of client devices attached to each"""
        try:
            aps = self.supabase.table("aps")\
                .select("id, name, cx, cy")\
                .eq("floor_id", floor_id)\
                .order("id")\
                .execute()
            ap_ids = [ap["id"] for ap in aps.data]
            counts = Counter()
            if ap_ids:
                clients = self.supabase.table("clients")\
                    .select("ap_id")\
                    .in_("ap_id", ap_ids)\
                    .execute()
                counts = Counter(client["ap_id"] for client in clients.data)
        except Exception as e:
            store_error(e, "Devices by AP", "Failed to fetch devices-by-ap")

        return DevicesByAPResponse(
            floor_id=floor_id,
            aps=[
                APDeviceCount(
                    ap_id=ap["id"],
                    title=ap["name"],
                    cx=ap["cx"],
                    cy=ap["cy"],
                    device_count=counts[ap["id"]],
                )
                for ap in aps.data
            ],
        )

    def _count(self, table: str) -> int:
        result = self.supabase.table(table)\
            .select("id", count="exact")\
            .execute()
        return result.count or 0

    def total_devices(self) -> int:
        try:
            return self._count("clients")
        except Exception as e:
            store_error(e, "Count devices", "Failed to fetch devices")

    def total_aps(self) -> int:
        try:
            return self._count("aps")
        except Exception as e:
            store_error(e, "Count APs", "Failed to fetch APs")
