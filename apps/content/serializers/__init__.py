from .footer_serializers import FooterContentSerializer, FooterContentWriteSerializer

__all__ = [
    'FooterContentSerializer',
    'FooterContentWriteSerializer',
]
