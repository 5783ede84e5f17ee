"""Domain-level validation rules for quota derivation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuotaPolicy:
    senior_priority_tier: int = 1
    senior_quota_divisor: int = 4
    standard_quota_divisor: int = 2

    def divisor_for(self, priority: int) -> int:
        if priority == self.senior_priority_tier:
            return self.senior_quota_divisor
        return self.standard_quota_divisor


DEFAULT_QUOTA_POLICY = QuotaPolicy()


def validate_quota_policy(policy: QuotaPolicy) -> None:
    if policy.senior_priority_tier <= 0:
        raise ValueError("senior_priority_tier must be > 0")
    if policy.senior_quota_divisor <= 0:
        raise ValueError("senior_quota_divisor must be > 0")
    if policy.standard_quota_divisor <= 0:
        raise ValueError("standard_quota_divisor must be > 0")
