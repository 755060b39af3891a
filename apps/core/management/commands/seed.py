from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from apps.feed.models import Announcement, AnnouncementType
from apps.jobs.models import JobOffer, JobType
from apps.marketplace.models import Service, ServiceStatus
from apps.messaging.models import Message
from apps.network.models import Connection
from apps.projects.models import Project

User = get_user_model()


class Command(BaseCommand):
    help = 'Seeds the database with sample data for testing.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing data before seeding',
        )
        parser.add_argument(
            '--users',
            action='store_true',
            help='Seed users only',
        )
        parser.add_argument(
            '--projects',
            action='store_true',
            help='Seed projects only',
        )
        parser.add_argument(
            '--jobs',
            action='store_true',
            help='Seed job offers only',
        )
        parser.add_argument(
            '--services',
            action='store_true',
            help='Seed marketplace services only',
        )
        parser.add_argument(
            '--feed',
            action='store_true',
            help='Seed announcements only',
        )

    def handle(self, *args, **options):
        seed_all = not any([
            options['users'], options['projects'], options['jobs'],
            options['services'], options['feed'],
        ])

        if options['clean']:
            self.stdout.write(self.style.WARNING('Cleaning database...'))
            self._clean_database()
            self.stdout.write(self.style.SUCCESS('Database cleaned.'))

        # Every other section needs the role accounts
        call_command('seed_users', stdout=self.stdout)
        users = {u.username: u for u in User.objects.filter(
            username__in=['admin', 'assistant', 'student', 'mentor', 'company']
        )}

        if seed_all or options['projects']:
            self._seed_projects(users)

        if seed_all or options['jobs']:
            self._seed_jobs(users)

        if seed_all or options['services']:
            self._seed_services(users)

        if seed_all or options['feed']:
            self._seed_feed(users)

        self.stdout.write(self.style.SUCCESS('Seeding completed successfully.'))

    def _clean_database(self):
        Message.objects.all().delete()
        Connection.objects.all().delete()
        Announcement.objects.all().delete()
        Service.objects.all().delete()
        JobOffer.objects.all().delete()
        Project.objects.all().delete()
        User.objects.exclude(is_superuser=True).delete()

    def _seed_projects(self, users):
        self.stdout.write('Seeding Projects...')

        projects = [
            {
                'title': 'Solar irrigation prototype',
                'description': 'Low-cost irrigation controller for market gardens around the city',
                'category': 'Engineering',
                'skills': ['electronics', 'arduino', 'python'],
                'max_participants': 5,
            },
            {
                'title': 'Campus lost & found app',
                'description': 'A small web app to report and claim lost items on campus',
                'category': 'Software',
                'skills': ['django', 'react'],
                'max_participants': 4,
            },
        ]
        for data in projects:
            _, created = Project.objects.get_or_create(
                title=data['title'],
                creator=users['student'],
                defaults=data,
            )
            if created:
                self.stdout.write(f" - Created project: {data['title']}")

    def _seed_jobs(self, users):
        self.stdout.write('Seeding Jobs...')

        jobs = [
            {
                'title': 'Backend developer intern',
                'description': 'Build and maintain REST APIs for our payment platform',
                'company': 'Tchad Digital',
                'location': "N'Djamena",
                'job_type': JobType.INTERNSHIP,
                'duration': '6 months',
                'requirements': ['python', 'sql'],
                'benefits': ['mentoring', 'transport allowance'],
            },
            {
                'title': 'Part-time data entry',
                'description': 'Digitise survey results for a public health study',
                'company': 'Tchad Digital',
                'location': 'Remote',
                'job_type': JobType.PART_TIME,
                'requirements': ['excel'],
            },
        ]
        for data in jobs:
            _, created = JobOffer.objects.get_or_create(
                title=data['title'],
                poster=users['company'],
                defaults=data,
            )
            if created:
                self.stdout.write(f" - Created job offer: {data['title']}")

    def _seed_services(self, users):
        self.stdout.write('Seeding Services...')

        services = [
            {
                'title': 'Math tutoring',
                'description': 'Calculus and linear algebra for first and second year students',
                'category': 'Tutoring',
                'price': '3000 FCFA/h',
                'availability': 'Evenings and weekends',
                'status': ServiceStatus.ACTIVE,
            },
            {
                'title': 'CV and cover letter review',
                'description': 'Feedback on your CV before internship applications',
                'category': 'Career',
                'price': 'Free',
                'status': ServiceStatus.PENDING_APPROVAL,
            },
        ]
        for data in services:
            _, created = Service.objects.get_or_create(
                title=data['title'],
                provider=users['mentor'],
                defaults=data,
            )
            if created:
                self.stdout.write(f" - Created service: {data['title']} ({data['status']})")

    def _seed_feed(self, users):
        self.stdout.write('Seeding Feed...')

        announcements = [
            (users['admin'], AnnouncementType.GENERAL, 'Welcome to SkillLink',
             'Complete your profile so other students can find you.'),
            (users['company'], AnnouncementType.JOB, 'We are hiring interns',
             'Tchad Digital opens two backend internships this semester.'),
            (users['student'], AnnouncementType.PROJECT, None,
             'Looking for two teammates for the solar irrigation prototype.'),
        ]
        for author, announcement_type, title, content in announcements:
            _, created = Announcement.objects.get_or_create(
                author=author,
                content=content,
                defaults={'title': title, 'announcement_type': announcement_type},
            )
            if created:
                self.stdout.write(f" - Created announcement by {author.username}")
