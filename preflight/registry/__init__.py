# Issue metadata lookup
from .issue_meta import get_meta, is_blocking, known_codes

__all__ = ['get_meta', 'is_blocking', 'known_codes']
