from .report_config import ModesConfig, ReportConfig
from .server import ServerRecord

__all__ = ["ModesConfig", "ReportConfig", "ServerRecord"]
