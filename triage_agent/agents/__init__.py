from .classifier_agent import ClassifierAgent
from .json_agent import JSONAgent
from .email_agent import EmailAgent

__all__ = ["ClassifierAgent", "JSONAgent", "EmailAgent"]
