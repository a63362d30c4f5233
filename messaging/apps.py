from django.apps import AppConfig


class MessagingConfig(AppConfig):
    """Configuration for the messaging app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "messaging"

    def ready(self) -> None:
        # One relay per process, reached through messaging.relay.get_relay()
        from .relay import RealtimeRelay

        self.relay = RealtimeRelay()
