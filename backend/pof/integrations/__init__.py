"""
Clients for external services.
"""
from pof.integrations.gtt_core_service import GTTCoreServiceClient

__all__ = ["GTTCoreServiceClient"]
