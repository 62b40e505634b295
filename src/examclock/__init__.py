"""exam-clock: a proctored-exam countdown with extra time and auto-start."""

__version__ = "0.1.0"
