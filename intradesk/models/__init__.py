"""Database models."""

from intradesk.models.user import User
from intradesk.models.evaluation import Evaluation
from intradesk.models.proposal import Proposal
from intradesk.models.application import Application
from intradesk.models.app_setting import AppSetting

__all__ = ["User", "Evaluation", "Proposal", "Application", "AppSetting"]
