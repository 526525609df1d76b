from ummah_speaks.facade.core import UmmahSpeaks

__all__ = ["UmmahSpeaks"]
