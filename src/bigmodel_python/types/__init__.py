"""
Types layer - request and response models for every capability.

- ChatMessage, Message and content parts for conversations
- Tool and ToolCall for function calling
- Request/response pairs for chat, image, video and audio
"""

from bigmodel_python.types.audio import (
    AudioFormat,
    AudioOutput,
    SpeechRequest,
    TranscriptionChunk,
    TranscriptionEventType,
    TranscriptionRequest,
    TranscriptionResponse,
    TranscriptionSegment,
)
from bigmodel_python.types.base import RequestModel, ResponseModel
from bigmodel_python.types.chat import (
    ChatAsyncResult,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    ResponseFormat,
    StreamChoice,
    Thinking,
)
from bigmodel_python.types.common import (
    AsyncTaskResponse,
    ContentFilter,
    PromptTokensDetails,
    TaskStatus,
    Usage,
    VideoResult,
    WebSearchResult,
)
from bigmodel_python.types.image import ImageRequest, ImageResponse, ImageResult
from bigmodel_python.types.message import (
    AudioReply,
    ChatMessage,
    ContentPart,
    FileUrlPart,
    ImageUrlPart,
    InputAudio,
    InputAudioPart,
    MediaUrl,
    Message,
    MessageContent,
    MessageRole,
    TextPart,
    VideoUrlPart,
    file_url,
    image_url,
    input_audio,
    text,
    video_url,
)
from bigmodel_python.types.tool import (
    FunctionDefinition,
    McpCall,
    McpInputSchema,
    McpTool,
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolChoice,
)
from bigmodel_python.types.video import VideoRequest, VideoResultResponse, VideoSubmission

__all__ = [
    # Base
    "RequestModel",
    "ResponseModel",
    # Messages
    "AudioReply",
    "ChatMessage",
    "ContentPart",
    "FileUrlPart",
    "ImageUrlPart",
    "InputAudio",
    "InputAudioPart",
    "MediaUrl",
    "Message",
    "MessageContent",
    "MessageRole",
    "TextPart",
    "VideoUrlPart",
    "file_url",
    "image_url",
    "input_audio",
    "text",
    "video_url",
    # Tools
    "FunctionDefinition",
    "McpCall",
    "McpInputSchema",
    "McpTool",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolChoice",
    # Common
    "AsyncTaskResponse",
    "ContentFilter",
    "PromptTokensDetails",
    "TaskStatus",
    "Usage",
    "VideoResult",
    "WebSearchResult",
    # Chat
    "ChatAsyncResult",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "ResponseFormat",
    "StreamChoice",
    "Thinking",
    # Image
    "ImageRequest",
    "ImageResponse",
    "ImageResult",
    # Video
    "VideoRequest",
    "VideoResultResponse",
    "VideoSubmission",
    # Audio
    "AudioFormat",
    "AudioOutput",
    "SpeechRequest",
    "TranscriptionChunk",
    "TranscriptionEventType",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "TranscriptionSegment",
]
