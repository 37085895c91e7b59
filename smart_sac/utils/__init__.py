from smart_sac.utils.datetime_utils import Clock, DateTimeHelper

__all__ = ["Clock", "DateTimeHelper"]
