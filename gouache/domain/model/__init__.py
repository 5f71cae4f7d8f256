"""Domain model entities for Gouache."""

from gouache.domain.model.activation import ActivationAccount
from gouache.domain.model.invite import Invite
from gouache.domain.model.onboarding import OnboardingDraft, OnboardingSession
from gouache.domain.model.profile import Profile

__all__ = [
    "ActivationAccount",
    "Invite",
    "OnboardingDraft",
    "OnboardingSession",
    "Profile",
]
