from .text_extraction import (
    UnsupportedFileTypeError,
    extract_text_from_file,
    is_supported_upload,
)
from .ai_client import (
    AIService,
    AIServiceError,
    AINotConfiguredError,
    AIProviderError,
    AIResponseFormatError,
    Provider,
    select_provider,
    extract_json_payload,
    create_ai_service,
)
from .affinda import ResumeParserAPIError, parse_with_affinda
from .config_store import (
    ConfigValidationError,
    load_api_config,
    save_api_config,
    reset_api_config,
    get_config_status,
)
from .analysis import analyze_resume, build_analysis
from .chat import EmptyMessageError, chat_with_advisor

__all__ = [
    # Text extraction
    "UnsupportedFileTypeError",
    "extract_text_from_file",
    "is_supported_upload",
    # AI providers
    "AIService",
    "AIServiceError",
    "AINotConfiguredError",
    "AIProviderError",
    "AIResponseFormatError",
    "Provider",
    "select_provider",
    "extract_json_payload",
    "create_ai_service",
    # Resume parser API
    "ResumeParserAPIError",
    "parse_with_affinda",
    # Configuration
    "ConfigValidationError",
    "load_api_config",
    "save_api_config",
    "reset_api_config",
    "get_config_status",
    # Pipelines
    "analyze_resume",
    "build_analysis",
    "EmptyMessageError",
    "chat_with_advisor",
]
