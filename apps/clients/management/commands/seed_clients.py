# apps/clients/management/commands/seed_clients.py
import logging

from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS, transaction
from faker import Faker

from apps.clients.models import Address, Client

logger = logging.getLogger(__name__)

# (first name, last name, phone, street, city, state, zip)
SAMPLE_CLIENTS = [
    ("John", "Doe", "123-456-7890", "123 Main St", "Anytown", "CA", "123450"),
    ("Jane", "Smith", "987-654-3210", "456 Elm St", "Othertown", "NY", "678900"),
    ("Alice", "Johnson", "555-123-4567", "789 Oak St", "Springfield", "IL", "627010"),
    ("Bob", "Williams", "555-987-6543", "101 Pine St", "Shelbyville", "IN", "461760"),
    ("Charlie", "Brown", "555-555-5555", "202 Maple St", "Capital City", "NV", "891010"),
    ("David", "Jones", "555-111-2222", "303 Birch St", "Ogdenville", "UT", "844010"),
    ("Eve", "Garcia", "555-333-4444", "404 Cedar St", "North Haverbrook", "NH", "037840"),
    ("Frank", "Miller", "555-666-7777", "505 Walnut St", "Brockway", "MI", "480970"),
    ("Grace", "Davis", "555-888-9999", "606 Spruce St", "Springfield", "MO", "658020"),
    ("Hank", "Rodriguez", "555-000-1111", "707 Fir St", "Springfield", "OR", "974770"),
    ("Ivy", "Martinez", "555-222-3333", "808 Pine St", "Shelbyville", "KY", "400650"),
    ("Jack", "Hernandez", "555-444-5555", "909 Maple St", "Capital City", "TX", "733010"),
    ("Karen", "Lopez", "555-666-7777", "111 Birch St", "Ogdenville", "CO", "802020"),
    ("Leo", "Gonzalez", "555-888-9999", "222 Cedar St", "North Haverbrook", "VT", "056020"),
    ("Mona", "Wilson", "555-000-1111", "333 Walnut St", "Brockway", "WI", "530050"),
    ("Nina", "Anderson", "555-222-3333", "444 Spruce St", "Springfield", "MA", "011030"),
    ("Oscar", "Thomas", "555-444-5555", "555 Fir St", "Springfield", "OH", "455020"),
    ("Paul", "Taylor", "555-666-7777", "666 Pine St", "Shelbyville", "TN", "371600"),
    ("Quincy", "Moore", "555-888-9999", "777 Maple St", "Capital City", "GA", "303010"),
    ("Rachel", "Jackson", "555-000-1111", "888 Birch St", "Ogdenville", "FL", "320990"),
    ("Steve", "Martin", "555-222-3333", "999 Cedar St", "North Haverbrook", "AZ", "850010"),
    ("Tina", "Lee", "555-444-5555", "1010 Walnut St", "Brockway", "WA", "980040"),
    ("Uma", "Perez", "555-666-7777", "1212 Spruce St", "Springfield", "PA", "171010"),
]


class Command(BaseCommand):
    help = "Seed the database with the sample client roster"

    def add_arguments(self, parser):
        parser.add_argument('--fake', type=int, default=0, help='Number of extra random clients to create')
        parser.add_argument('--using', default=DEFAULT_DB_ALIAS, help='Database alias to seed')

    def handle(self, *args, **options):
        using = options['using']
        fake_count = options['fake']

        if Client.objects.using(using).exists():
            self.stdout.write(self.style.WARNING("Clients already present, sample roster skipped"))
        else:
            with transaction.atomic(using=using):
                for index, row in enumerate(SAMPLE_CLIENTS, start=1):
                    first_name, last_name, phone, street, city, state, zip_code = row
                    address = Address.objects.using(using).create(
                        street_address=street, city=city, state=state, zip=zip_code,
                    )
                    Client.objects.using(using).create(
                        first_name=first_name,
                        last_name=last_name,
                        email=f"{first_name.lower()}@example.com",
                        phone=phone,
                        address=address,
                        description=f"Sample client {index}",
                    )
            logger.info("Seeded %s sample clients", len(SAMPLE_CLIENTS))
            self.stdout.write(self.style.SUCCESS(f"Created {len(SAMPLE_CLIENTS)} sample clients"))

        if fake_count:
            self.create_fake_clients(fake_count, using)
            self.stdout.write(self.style.SUCCESS(f"Created {fake_count} random clients"))

    def create_fake_clients(self, count, using):
        """Random clients whose fields pass the edit form's validation"""
        fake = Faker()
        with transaction.atomic(using=using):
            for _ in range(count):
                first_name = ''.join(ch for ch in fake.first_name() if ch.isascii() and ch.isalpha()) or 'Sam'
                last_name = ''.join(ch for ch in fake.last_name() if ch.isascii() and ch.isalpha()) or 'Smith'
                address = Address.objects.using(using).create(
                    street_address=fake.street_address(),
                    city=fake.city(),
                    state=fake.state_abbr(),
                    zip=fake.numerify('######'),
                )
                Client.objects.using(using).create(
                    first_name=first_name,
                    last_name=last_name,
                    email=fake.email(),
                    phone=fake.numerify('###-###-####'),
                    address=address,
                    description=fake.sentence() if fake.boolean() else None,
                )
