"""
Drive one form session from the terminal against a running server
Run: python manage.py suggest_prescription --name Jane --age 30 --gender Female --symptoms "fever, cough"
"""
import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from rx_assist.exceptions import ValidationError
from prescriptions.api_client import SuggestionsApiClient
from prescriptions.form_session import PrescriptionFormSession
from prescriptions.types import PatientInfo, SuggestionCategory


class Command(BaseCommand):
    help = 'Ask the suggestion endpoint for one patient and print the form state'

    def add_arguments(self, parser):
        parser.add_argument('--name', required=True)
        parser.add_argument('--age', required=True)
        parser.add_argument('--gender', required=True)
        parser.add_argument('--symptoms', required=True)
        parser.add_argument('--history', default='')
        parser.add_argument('--url', default=None, help='defaults to settings.SUGGESTIONS_API_URL')
        parser.add_argument(
            '--accept-all', action='store_true',
            help='click every suggestion before printing',
        )

    def handle(self, *args, **options):
        client = SuggestionsApiClient(options['url'] or settings.SUGGESTIONS_API_URL)
        session = PrescriptionFormSession(
            client,
            med_name_limit=settings.MED_NAME_AUTOCOMPLETE_LIMIT,
            chip_limit=settings.CHIP_AUTOCOMPLETE_LIMIT,
        )
        session.load_medication_pool()

        patient = PatientInfo(
            name=options['name'],
            age=options['age'],
            gender=options['gender'],
            symptoms=options['symptoms'],
            past_history=options['history'],
        )
        try:
            session.submit_patient(patient)
        except ValidationError as e:
            raise CommandError(e.message)

        if options['accept_all']:
            for category in SuggestionCategory:
                for name in session.regions[category].names():
                    session.click_suggestion(category, name)

        self.stdout.write(json.dumps(session.view(), indent=2))
