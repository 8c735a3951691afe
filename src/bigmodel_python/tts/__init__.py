"""TTS 模块：文本转语音。

TTS (Text-to-Speech) capability.
"""

from bigmodel_python.tts.client import synthesize_speech

__all__ = ["synthesize_speech"]
