"""Transcript module."""

from .transcript import ITranscriptSink, Transcript, TranscriptListener

__all__ = ["ITranscriptSink", "Transcript", "TranscriptListener"]
