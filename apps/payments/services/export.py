"""CSV export of filtered payments."""

import csv
import io
from typing import Optional

from django.db.models import Q

from .pagination import filtered_payments
from .store import store_guard

CSV_HEADER = [
    'ID',
    'Transaction ID',
    'Amount',
    'Status',
    'Method',
    'Receiver',
    'Created At',
    'Updated At',
]


@store_guard
def export_payments_csv(predicate: Optional[Q] = None) -> bytes:
    """
    Render every payment matching ``predicate`` as UTF-8 CSV.

    Rows are ordered newest first. The full result set is loaded before
    formatting. Values containing commas, quotes or newlines are quoted,
    everything else is written bare.
    """
    payments = list(filtered_payments(predicate))

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for payment in payments:
        writer.writerow([
            payment.id,
            payment.transaction_id,
            f'{payment.amount:.2f}',
            payment.status,
            payment.method,
            payment.receiver,
            payment.created_at.isoformat(),
            payment.updated_at.isoformat(),
        ])

    return buffer.getvalue().encode('utf-8')
