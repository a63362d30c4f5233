import pytest
from django.contrib.auth import get_user_model

from users.models import UserProfile, display_name_for, profile_image_for

User = get_user_model()


@pytest.mark.django_db
def test_profile_created_with_user():
    u = User.objects.create_user(username="asha", password="pass1234", first_name="Asha", last_name="Rao")
    assert UserProfile.objects.filter(user=u).count() == 1
    assert u.profile.display_name == "Asha Rao"


@pytest.mark.django_db
def test_profile_not_duplicated_on_resave():
    u = User.objects.create_user(username="ravi", password="pass1234")
    u.email = "ravi@example.com"
    u.save()
    assert UserProfile.objects.filter(user=u).count() == 1


@pytest.mark.django_db
def test_display_name_falls_back_to_username():
    u = User.objects.create_user(username="meera", password="pass1234")
    assert display_name_for(u) == "meera"
    u.profile.display_name = "Meera K"
    u.profile.profile_image_url = "https://img/meera.png"
    u.profile.save()
    u.refresh_from_db()
    assert display_name_for(u) == "Meera K"
    assert profile_image_for(u) == "https://img/meera.png"
