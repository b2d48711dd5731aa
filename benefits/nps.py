"""
NPS-style benefit: a pure function of the final corpus.

  lump sum        = lump_sum_share × corpus
  annuity corpus  = annuity_share × corpus
  monthly pension = annuity corpus × annuity rate / 12
"""

from __future__ import annotations

from core.config import DEFAULT_POLICY, PolicyConfig
from core.utils import round_amount

from .base import NpsBenefit


def calculate_nps_benefit(corpus: float, *, policy: PolicyConfig = DEFAULT_POLICY) -> NpsBenefit:
    if corpus < 0:
        raise ValueError(f"Corpus cannot be negative, got {corpus}.")

    final_corpus = round_amount(corpus)
    lump_sum = round_amount(final_corpus * policy.lump_sum_share)
    annuity_corpus = round_amount(final_corpus * policy.annuity_share)
    monthly_pension = round_amount(annuity_corpus * policy.annuity_rate_annual / 12.0)

    return NpsBenefit(
        corpus=final_corpus,
        lump_sum=lump_sum,
        annuity_corpus=annuity_corpus,
        monthly_pension=monthly_pension,
        annuity_rate=round(policy.annuity_rate_annual * 100.0, 4),
    )
