"""EDF/BDF waveform viewer backend."""

__version__ = "0.1.0"
