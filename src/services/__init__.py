from src.services.ai_expiry_estimator import AIExpiryEstimator
from src.services.ai_suggestion_generator import AISuggestionGenerator
from src.services.rule_expiry_estimator import RuleBasedExpiryEstimator
from src.services.rule_suggestion_generator import RuleBasedSuggestionGenerator


__all__ = [
    "AIExpiryEstimator",
    "AISuggestionGenerator",
    "RuleBasedExpiryEstimator",
    "RuleBasedSuggestionGenerator",
]
