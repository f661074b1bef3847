"""RC and steel member design calculations per IS 456:2000."""

from loguru import logger

from .core.solvers import MemberType, solve
from .materials import MaterialTable, get_material_table

__version__ = "0.1.0"

logger.disable(__name__)

__all__ = ["MemberType", "solve", "MaterialTable", "get_material_table", "__version__"]
