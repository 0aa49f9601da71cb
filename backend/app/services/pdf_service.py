"""
PDF rendering of quotes and invoices (fpdf2).
Company details on the letterhead come from the company* settings.
"""

import io
import logging
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from fpdf import FPDF
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.schemas.invoice import InvoiceDetailResponse
from app.schemas.quote import QuoteDetailResponse
from app.services.base_service import BaseService
from app.services.invoice_service import InvoiceService
from app.services.quote_service import QuoteService
from app.services.setting_service import SettingService
from app.utils.money import ZERO, format_money, to_money

logger = logging.getLogger(__name__)

COMPANY_SETTINGS = ("companyName", "companyAddress", "companyPhone", "companyEmail", "companyGSTIN")
DEFAULT_COMPANY_NAME = "Quotedesk"
CURRENCY_PREFIX = "Rs. "
DATE_FORMAT = "%d %b %Y"


def latin1(value) -> str:
    """The core PDF fonts only cover Latin-1; anything else prints as '?'."""
    return str(value if value is not None else "").encode("latin-1", "replace").decode("latin-1")


def money(value) -> str:
    return f"{CURRENCY_PREFIX}{format_money(value)}"


class DocumentPDF(FPDF):
    """A4 page with the company letterhead and a page-numbered footer."""

    def __init__(self, heading: str, company: Dict[str, str]):
        super().__init__(format="A4")
        self.heading = heading
        self.company = company
        self.set_auto_page_break(auto=True, margin=18)
        self.set_fill_color(240, 240, 240)
        self.add_page()

    def header(self):
        self.set_font("Helvetica", "B", 16)
        self.cell(0, 8, latin1(self.company.get("companyName") or DEFAULT_COMPANY_NAME), new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 9)
        for key in ("companyAddress", "companyPhone", "companyEmail"):
            if self.company.get(key):
                self.multi_cell(0, 4.5, latin1(self.company[key]), new_x="LMARGIN", new_y="NEXT")
        if self.company.get("companyGSTIN"):
            self.cell(0, 4.5, latin1(f"GSTIN: {self.company['companyGSTIN']}"), new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "B", 14)
        self.cell(0, 9, self.heading, align="R", new_x="LMARGIN", new_y="NEXT")
        self.ln(2)

    def footer(self):
        self.set_y(-12)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, f"{self.heading}  |  Page {self.page_no()}/{{nb}}", align="C")

    def section(self, title: str):
        self.set_font("Helvetica", "B", 11)
        self.cell(0, 7, f"  {title}", new_x="LMARGIN", new_y="NEXT", fill=True)
        self.set_font("Helvetica", "", 10)

    def details(self, pairs: Iterable[Tuple[str, Optional[str]]]):
        """Label/value pairs, two per line; empty values are skipped."""
        filled = [(label, value) for label, value in pairs if value]
        half = self.epw / 2
        for index, (label, value) in enumerate(filled):
            last_in_row = index % 2 == 1 or index == len(filled) - 1
            self.cell(
                half,
                6,
                latin1(f"  {label}: {value}"),
                new_x="LMARGIN" if last_in_row else "RIGHT",
                new_y="NEXT" if last_in_row else "TOP",
            )
        self.ln(3)

    def lines(self, values: Iterable[Optional[str]]):
        for value in values:
            if value:
                self.multi_cell(0, 5, latin1(f"  {value}"), new_x="LMARGIN", new_y="NEXT")
        self.ln(3)

    def items_table(self, quote: QuoteDetailResponse):
        self.set_font("Helvetica", "", 9)
        with self.table(col_widths=(8, 92, 18, 36, 36), line_height=6) as table:
            heading = table.row()
            for title in ("#", "Description", "Qty", "Unit Price", "Amount"):
                heading.cell(title)
            for number, item in enumerate(quote.items, start=1):
                row = table.row()
                row.cell(str(number), align="C")
                row.cell(latin1(item.description))
                row.cell(str(item.quantity), align="R")
                row.cell(money(item.unit_price), align="R")
                row.cell(money(item.subtotal), align="R")
        self.ln(3)

    def totals(self, rows: List[Tuple[str, str]], bold_last: int = 1):
        label_width = self.epw - 50
        for index, (label, value) in enumerate(rows):
            bold = index >= len(rows) - bold_last
            self.set_font("Helvetica", "B" if bold else "", 11 if bold else 10)
            self.cell(label_width, 6, f"{label}:", align="R")
            self.cell(50, 6, value, align="R", new_x="LMARGIN", new_y="NEXT")
        self.ln(3)

    def paragraph(self, title: str, text: Optional[str]):
        if not text:
            return
        self.section(title)
        self.multi_cell(0, 5, latin1(text), new_x="LMARGIN", new_y="NEXT")
        self.ln(3)

    def to_bytes(self) -> bytes:
        return bytes(self.output())


def _client_block(pdf: DocumentPDF, quote: QuoteDetailResponse):
    client = quote.client
    pdf.section("Bill To")
    if client is None:
        pdf.lines([quote.client_name])
        return
    pdf.lines([
        client.name,
        client.contact_person and f"Attn: {client.contact_person}",
        client.billing_address,
        client.email,
        client.phone,
        client.gstin and f"GSTIN: {client.gstin}",
    ])
    if client.shipping_address:
        pdf.section("Ship To")
        pdf.lines([client.shipping_address])


def _quote_total_rows(quote: QuoteDetailResponse) -> List[Tuple[str, str]]:
    rows = [("Subtotal", money(quote.subtotal))]
    if to_money(quote.discount) > ZERO:
        rows.append(("Discount", f"- {money(quote.discount)}"))
    for label, value in (
        ("CGST", quote.cgst),
        ("SGST", quote.sgst),
        ("IGST", quote.igst),
        ("Shipping", quote.shipping_charges),
    ):
        if to_money(value) > ZERO:
            rows.append((label, money(value)))
    rows.append(("Total", money(quote.total)))
    return rows


def build_quote_pdf(quote: QuoteDetailResponse, company: Dict[str, str]) -> bytes:
    """Render a quote as a commercial proposal."""
    pdf = DocumentPDF("QUOTATION", company)

    pdf.section("Quote Details")
    valid_until = quote.quote_date + timedelta(days=quote.validity_days)
    pdf.details([
        ("Quote #", quote.quote_number),
        ("Date", quote.quote_date.strftime(DATE_FORMAT)),
        ("Status", quote.status.value.upper()),
        ("Valid until", valid_until.strftime(DATE_FORMAT)),
        ("Reference", quote.reference_number),
        ("Attention", quote.attention_to),
    ])
    _client_block(pdf, quote)

    pdf.section("Items")
    pdf.items_table(quote)
    pdf.totals(_quote_total_rows(quote))

    pdf.paragraph("Notes", quote.notes)
    pdf.paragraph("Terms and Conditions", quote.terms_and_conditions)
    return pdf.to_bytes()


def build_invoice_pdf(invoice: InvoiceDetailResponse, company: Dict[str, str]) -> bytes:
    """Render an invoice with its items, balance and payment history."""
    quote = invoice.quote
    pdf = DocumentPDF("TAX INVOICE", company)

    pdf.section("Invoice Details")
    pdf.details([
        ("Invoice #", invoice.invoice_number),
        ("Date", invoice.created_at.strftime(DATE_FORMAT)),
        ("Quote #", quote.quote_number),
        ("Due Date", invoice.due_date.strftime(DATE_FORMAT)),
        ("Status", invoice.payment_status.value.upper()),
        ("Reference", quote.reference_number),
    ])
    _client_block(pdf, quote)

    pdf.section("Items")
    pdf.items_table(quote)
    balance_due = to_money(quote.total) - to_money(invoice.paid_amount)
    rows = _quote_total_rows(quote)
    rows.append(("Paid", money(invoice.paid_amount)))
    rows.append(("Balance Due", money(max(balance_due, ZERO))))
    pdf.totals(rows)

    if invoice.payments:
        pdf.section("Payments")
        pdf.set_font("Helvetica", "", 9)
        with pdf.table(col_widths=(35, 40, 79, 36), line_height=6) as table:
            heading = table.row()
            for title in ("Date", "Method", "Reference", "Amount"):
                heading.cell(title)
            for payment in invoice.payments:
                row = table.row()
                row.cell(payment.payment_date.strftime(DATE_FORMAT))
                row.cell(payment.payment_method.value.replace("_", " ").title())
                row.cell(latin1(payment.transaction_id or ""))
                row.cell(money(payment.amount), align="R")
        pdf.ln(3)

    pdf.paragraph("Notes", quote.notes)
    pdf.paragraph("Terms and Conditions", quote.terms_and_conditions)
    return pdf.to_bytes()


class PdfService(BaseService):
    """Looks up a quote or invoice and renders it."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.quote_service = QuoteService(session)
        self.invoice_service = InvoiceService(session)
        self.setting_service = SettingService(session)

    async def _company(self) -> Dict[str, str]:
        settings = await self.setting_service.get_all()
        return {key: settings[key] for key in COMPANY_SETTINGS if settings.get(key)}

    async def render_quote(self, quote_id: UUID) -> Tuple[str, io.BytesIO]:
        """
        Render a quote.

        Returns:
            (file name, PDF content)

        Raises:
            NotFoundError: unknown quote
        """
        quote = await self.quote_service.get_quote_detail(quote_id)
        if not quote:
            raise NotFoundError("Quote not found", details={"quote_id": str(quote_id)})
        content = build_quote_pdf(quote, await self._company())
        logger.info(f"Rendered PDF for quote {quote.quote_number}", extra={"bytes": len(content)})
        return f"{quote.quote_number}.pdf", io.BytesIO(content)

    async def render_invoice(self, invoice_id: UUID) -> Tuple[str, io.BytesIO]:
        """Render an invoice. Raises NotFoundError for an unknown invoice."""
        invoice = await self.invoice_service.get_invoice(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice not found", details={"invoice_id": str(invoice_id)})
        content = build_invoice_pdf(invoice, await self._company())
        logger.info(f"Rendered PDF for invoice {invoice.invoice_number}", extra={"bytes": len(content)})
        return f"{invoice.invoice_number}.pdf", io.BytesIO(content)
