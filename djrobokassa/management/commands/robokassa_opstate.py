"""
Management command to query the Robokassa operation state of an invoice.
"""

from django.core.management.base import BaseCommand, CommandError
from djrobokassa.client import Robokassa
from djrobokassa.exceptions import RobokassaException, XmlParseError
from djrobokassa.services.state_service import parse_operation_state


class Command(BaseCommand):
    help = 'Query Robokassa operation state for an invoice'
    
    def add_arguments(self, parser):
        parser.add_argument(
            '--invoice',
            type=int,
            required=True,
            help='Invoice ID (InvId)'
        )
        parser.add_argument(
            '--url-only',
            action='store_true',
            help='Only print the signed request URL'
        )
    
    def handle(self, *args, **options):
        invoice_id = options['invoice']
        
        try:
            client = Robokassa.from_settings()
            
            if options['url_only']:
                self.stdout.write(client.get_operation_state_url(invoice_id))
                return
            
            self.stdout.write(f'Querying operation state for invoice {invoice_id}...')
            document = client.fetch_operation_state(invoice_id)
        
        except XmlParseError as e:
            for error in e.errors:
                self.stderr.write(f'  {error}')
            raise CommandError(f'Operation state query failed: {e.message}')
        except RobokassaException as e:
            raise CommandError(f'Operation state query failed: {e.message}')
        
        state = parse_operation_state(document)
        
        if not state.is_success:
            raise CommandError(
                f'Robokassa returned result code {state.result_code}: {state.result_description}'
            )
        
        state_name = state.state.name if state.state else 'UNKNOWN'
        style = self.style.SUCCESS if state.is_paid else self.style.WARNING
        
        self.stdout.write(style(f'\nState: {state_name} ({state.state_code})'))
        self.stdout.write(f'  Requested: {state.request_date}')
        self.stdout.write(f'  Changed: {state.state_date}')
        if state.out_sum:
            self.stdout.write(f'  Amount: {state.out_sum} {state.out_currency or ""}')
        if state.inc_sum:
            self.stdout.write(f'  Paid: {state.inc_sum} {state.inc_currency or ""}')
