from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("last_message_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("property", models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="conversations",
                    to="properties.property",
                )),
                ("user1", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="conversations_as_user1",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("user2", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="conversations_as_user2",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-last_message_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("user1", "user2"), name="uniq_conversation_user_pair"),
                    models.CheckConstraint(
                        condition=models.Q(("user1__lt", models.F("user2"))),
                        name="conversation_canonical_pair",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("body", models.TextField()),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("conversation", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="messages",
                    to="messaging.conversation",
                )),
                ("receiver", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="received_messages",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("sender", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="sent_messages",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["conversation", "created_at"], name="msg_conv_created_idx"),
                    models.Index(fields=["receiver", "is_read"], name="msg_receiver_read_idx"),
                ],
            },
        ),
    ]
