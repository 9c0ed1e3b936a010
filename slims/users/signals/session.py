# slims/users/signals/session.py
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from slims.users.models.base_user import User
from slims.users.models.session import SessionToken
from slims.users.utils import session_store


@receiver(post_delete, sender=SessionToken)
def evict_deleted_session(sender, instance, **kwargs):
    """Keep the session cache from serving tokens deleted from the database"""
    session_store.delete(instance.token)


@receiver(post_save, sender=User)
def revoke_sessions_of_deactivated_user(sender, instance, created, **kwargs):
    if created or instance.is_active:
        return
    for session in SessionToken.objects.filter(user=instance):
        session.delete()
