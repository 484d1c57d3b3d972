"""
CT/MRI analyser — estimates whether a medical imaging slice comes from a CT
scanner or an MRI acquisition, and explains the decision.

Modular layout: raster ingestion, feature extraction, a calibrated linear
classifier and an explainer, with a thin CLI on top.
"""

__version__ = "0.1.0"
