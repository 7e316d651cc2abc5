"""Operations wiring validation, probing, planning and execution together."""

from tvt.services.convert import ConvertRequest, ConvertResult, convert_video
from tvt.services.extract import ExtractRequest, ExtractResult, extract_audio
from tvt.services.inspect import inspect_media

__all__ = [
    "ConvertRequest",
    "ConvertResult",
    "ExtractRequest",
    "ExtractResult",
    "convert_video",
    "extract_audio",
    "inspect_media",
]
