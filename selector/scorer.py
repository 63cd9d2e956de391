"""Weighted multi-criteria scoring of candidates against a blueprint."""

from typing import Dict

from contracts import Blueprint, Metrics, Weights

LATENCY_SLO_BONUS = 0.10
GLOBAL_OPS_BONUS = 0.05
# Fixed: assumes the weights sum to 1.0 and both bonuses apply at most once.
NORMALIZATION_DIVISOR = 1.15


class Scorer:
    """Computes a bounded weighted score from candidate metrics.

    score = (sum(w_i * m_i)
             + 0.10 * slo  if latency sensitive
             + 0.05 * ops  if global) / 1.15
    """

    def __init__(self, weights: Weights):
        self.weights = weights

    def breakdown(self, metrics: Metrics) -> Dict[str, float]:
        """Weighted contribution of each metric, before bonuses."""
        w = self.weights
        return {
            "quality": w.quality * metrics.quality,
            "slo": w.slo * metrics.slo,
            "cost": w.cost * metrics.cost,
            "security": w.security * metrics.security,
            "ops": w.ops * metrics.ops,
        }

    def score(self, metrics: Metrics, blueprint: Blueprint) -> float:
        parts = self.breakdown(metrics)
        raw = parts["quality"] + parts["slo"] + parts["cost"] + parts["security"] + parts["ops"]

        traffic = blueprint.traffic_profile
        if traffic.latency_sensitive:
            raw += LATENCY_SLO_BONUS * metrics.slo
        if traffic.is_global:
            raw += GLOBAL_OPS_BONUS * metrics.ops

        return raw / NORMALIZATION_DIVISOR
