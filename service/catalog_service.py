"""Product catalog services: tools, VPS plans and proxy packages."""

from typing import List

from core.normalization import normalize_list
from data.models import Proxy, Tool, Vps
from service.base_service import ToggleableService

class ToolService(ToggleableService):
    resource = "tools"
    model = Tool

    def list_admin(self) -> List[Tool]:
        """Every tool regardless of status, unpaginated."""
        try:
            body = self.api.list_admin()
        except Exception as e:
            self.logger.error("Error fetching admin tools", error=str(e))
            return []
        return normalize_list(body, mapper=Tool.from_api).items

class VpsService(ToggleableService):
    resource = "vps"
    model = Vps

class ProxyService(ToggleableService):
    resource = "proxies"
    model = Proxy
