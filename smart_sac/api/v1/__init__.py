from smart_sac.api.v1.router import router

__all__ = ["router"]
