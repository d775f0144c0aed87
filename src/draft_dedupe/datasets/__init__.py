from draft_dedupe.datasets.articles import OPTIONALS_ARTICLE
from draft_dedupe.datasets.reference import ReferenceDraftGenerator

__all__ = ["OPTIONALS_ARTICLE", "ReferenceDraftGenerator"]
