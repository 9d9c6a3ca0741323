"""Alt Text Generator - AI alt text with a feedback and fine-tuning loop."""

__version__ = "0.1.0"
