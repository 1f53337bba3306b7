import re
from typing import Optional


class InputValidator:
    
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
    
    MAX_TEXT_LENGTH = 5000
    
    @staticmethod
    def sanitize_text(text: Optional[str], max_length: int = MAX_TEXT_LENGTH) -> Optional[str]:
        if text is None:
            return None
        
        text = InputValidator.CONTROL_CHARS_PATTERN.sub('', str(text))
        
        text = re.sub(r'\s+', ' ', text).strip()
        
        if len(text) > max_length:
            text = text[:max_length]
        
        return text
    
    @staticmethod
    def sanitize_required(text: Optional[str], field: str) -> str:
        cleaned = InputValidator.sanitize_text(text)
        if not cleaned:
            raise ValueError(f"{field} cannot be empty")
        return cleaned
    
    @staticmethod
    def normalize_tag(tag: str) -> str:
        """Turn 'Major News', 'fact-check-org' or 'PARTIALLY_TRUE' into enum values."""
        tag = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", str(tag).strip())
        return re.sub(r"[\s\-]+", "_", tag).lower()
