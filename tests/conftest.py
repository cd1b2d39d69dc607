import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_ingest.main import create_app

NAYAPAY_STATEMENT = """NayaPay
Account Statement
www.nayapay.com
Total Spent Rs. 3,525
Total Income Rs. 50,000
TIME TYPE DESCRIPTION AMOUNT BALANCE
12 Jan 2025
10:15 AM
Online Transaction
Paid to NETFLIX.COM Singapore SG
Transaction ID 9f8e7d
-Rs. 1,500Rs. 48,500.00
13 Jan 2025
09:00 AM
Raast In
Incoming fund transfer from Ali Raza Khan Ahmed
United Bank-1234
+Rs. 50,000Rs. 98,500.00
CARRIED FORWARD
TIME TYPE DESCRIPTION AMOUNT BALANCE
14 Jan 2025
11:30 AM
IBFT Out
Outgoing fund transfer to Sara Ahmed
Fees and Government Taxes Rs. 25
-Rs. 2,000Rs. 96,475.00
(021) 111-222-729 support@nayapay.com"""

HBL_STATEMENT = """HBL Mobile
Habib Bank Limited
Account Activity generated through HBL Mobile
Account Number 1234567890123
IBAN: PK36HABB0000001234567890
Transaction Details
Date Value Date Description Debit Credit Balance
01-03-2024 01-03-2024 FUNDS TRANSFER FR ALI KHAN 5,000.00 25,000.00
REF 1234567890123456

02-03-2024 02-03-2024 POS PURCHASE DARAZ PK 1,200.50 23,799.50

03-03-2024 03-03-2024 ATM CASH WITHDRAWAL 3,000.00 20,799.50
"""

CSV_STATEMENT = """Date,Debit,Credit,Description
15-03-2024,0,2500,Salary payment
16-03-2024,450.75,0,"Grocery, Store"
"""


@pytest.fixture
def nayapay_text() -> str:
    return NAYAPAY_STATEMENT


@pytest.fixture
def hbl_text() -> str:
    return HBL_STATEMENT


@pytest.fixture
def csv_text() -> str:
    return CSV_STATEMENT


@pytest.fixture
def app():
    """Fresh application per test so dependency overrides never leak."""
    return create_app()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
