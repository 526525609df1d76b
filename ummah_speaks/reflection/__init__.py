from ummah_speaks.reflection.composer import ReflectionComposer
from ummah_speaks.reflection.prompt import DEFAULT_NAME

__all__ = ["DEFAULT_NAME", "ReflectionComposer"]
