from django.core.management.base import BaseCommand
from apps.identity.models import User, UserRole

# One account per role; all share the password "password"
SEED_USERS = [
    {'username': 'admin', 'role': UserRole.ADMIN, 'first_name': 'Amina', 'last_name': 'Haroun'},
    {'username': 'assistant', 'role': UserRole.ASSISTANT_ADMIN, 'first_name': 'Idriss', 'last_name': 'Mahamat'},
    {'username': 'student', 'role': UserRole.STUDENT, 'first_name': 'Fatime', 'last_name': 'Abakar',
     'university': 'University of N\'Djamena', 'field': 'Computer Science', 'year_of_study': 3},
    {'username': 'mentor', 'role': UserRole.MENTOR, 'first_name': 'Moussa', 'last_name': 'Deby',
     'field': 'Software Engineering'},
    {'username': 'company', 'role': UserRole.COMPANY, 'first_name': 'Tchad', 'last_name': 'Digital'},
]


class Command(BaseCommand):
    help = 'Seeds the database with one test user per role'

    def handle(self, *args, **options):
        for u in SEED_USERS:
            fields = dict(u)
            username = fields.pop('username')
            user, created = User.objects.get_or_create(username=username)

            for key, value in fields.items():
                setattr(user, key, value)
            user.email = f"{username}@skilllink.test"
            if u['role'] == UserRole.ADMIN:
                user.is_staff = True
                user.is_superuser = True

            if created:
                user.set_password('password')
                user.save()
                self.stdout.write(self.style.SUCCESS(f'Created user: {username} (Role: {u["role"]})'))
            else:
                user.save()
                self.stdout.write(self.style.WARNING(f'Updated user: {username}'))
