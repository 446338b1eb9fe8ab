"""
Signals for Robokassa callback events.
"""
from django.dispatch import Signal

# Signal sent when a Result callback passes signature verification
# Provides arguments:
# - invoice_id: The InvId string from the callback
# - amount: The OutSum string from the callback
# - shop_data: Dict of Shp_* parameters
# - data: All callback parameters
result_received = Signal()

# Signal sent when a Success callback passes signature verification
success_received = Signal()

# Signal sent when the customer returns through the Fail URL
fail_received = Signal()
