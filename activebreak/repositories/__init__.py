from .rule_repo import RuleRepo
from .activity_repo import ActivityRepo
from .trigger_log_repo import TriggerLogRepo
from .catalog_repo import CatalogRepo
from .user_repo import UserRepo

__all__ = ["RuleRepo", "ActivityRepo", "TriggerLogRepo", "CatalogRepo", "UserRepo"]
