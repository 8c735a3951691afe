"""STT 模块：语音转文本。

STT (Speech-to-Text) capability.
"""

from bigmodel_python.stt.client import stream_transcription, transcribe

__all__ = ["stream_transcription", "transcribe"]
