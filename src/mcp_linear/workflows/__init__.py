"""Multi-call workflows spanning Linear and GitHub."""

from .feature_pr import FeaturePRState, FeaturePRWorkflow, feature_pr_title

__all__ = ["FeaturePRState", "FeaturePRWorkflow", "feature_pr_title"]
