from ummah_speaks.classifier.gateway import ClassifierGateway

__all__ = ["ClassifierGateway"]
