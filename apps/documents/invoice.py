"""Invoice PDF."""

from __future__ import annotations

from datetime import date
from io import BytesIO
from xml.sax.saxutils import escape

from django.conf import settings  # type: ignore
from reportlab.lib import colors  # type: ignore
from reportlab.lib.pagesizes import A4  # type: ignore
from reportlab.lib.styles import getSampleStyleSheet  # type: ignore
from reportlab.lib.units import mm  # type: ignore
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # type: ignore

from .data import InvoiceData
from .formatting import format_amount, format_date, format_date_long, format_price


def _rental_designation(data: InvoiceData) -> str:
    text = (
        f"Location du {format_date_long(data.start_date, with_year=False)} "
        f"au {format_date_long(data.end_date, with_year=False)}"
    )
    if data.has_season_breakdown:
        for detail in data.price_details:
            plural = "s" if detail.nights > 1 else ""
            text += (
                f"<br/>&#160;&#160;{detail.nights} nuit{plural} {escape(detail.season_name)} "
                f"x {format_price(detail.price_per_night)} EUR"
            )
    return text


def invoice_lines(data: InvoiceData) -> list[tuple[str, object]]:
    """Designation / amount rows of the invoice table."""
    rates = settings.RENTAL_RATES
    return [
        (_rental_designation(data), data.rental_price),
        (f"Ménage {format_amount(rates['cleaning'])} € (sauf coin cuisine)", data.cleaning_price),
        (
            f"Linge de lit et serviettes de toilettes {format_amount(rates['linen_per_person'])} €/personne",
            data.linen_price,
        ),
        (
            f"Taxe de séjour {format_amount(rates['tourist_tax_per_adult_night'])} €/pers/jour sauf mineur",
            data.tourist_tax_price,
        ),
    ]


def generate_invoice(data: InvoiceData, *, issued_on: date | None = None) -> bytes:
    landlord = settings.LANDLORD
    rates = settings.RENTAL_RATES
    issued_on = issued_on or date.today()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        title=f"Facture {data.invoice_number}",
    )
    styles = getSampleStyleSheet()
    story = []

    header = Table(
        [
            [Paragraph(f"<b>{landlord['name']}</b>", styles["Heading2"]), Paragraph("<b>FACTURE</b>", styles["Title"])],
            [Paragraph(f"{landlord['address_line1']}<br/>{landlord['address_line2']}", styles["Normal"]), ""],
        ],
        colWidths=[100 * mm, 70 * mm],
    )
    header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP"), ("ALIGN", (1, 0), (1, 0), "RIGHT")]))
    story.append(header)
    story.append(Spacer(1, 20))

    client = data.client
    billed_to = f"<b>Facturé à</b><br/>{escape(client.full_name)}"
    if client.address:
        billed_to += f"<br/>{escape(client.address)}"
    billed_to += f"<br/>{escape(client.postal_code)} {escape(client.city)}"
    reference = Table(
        [["Facture n°", data.invoice_number], ["Date", format_date(issued_on)]],
        colWidths=[25 * mm, 45 * mm],
    )
    reference.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        )
    )
    parties = Table([[Paragraph(billed_to, styles["Normal"]), reference]], colWidths=[100 * mm, 70 * mm])
    parties.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
    story.append(parties)
    story.append(Spacer(1, 20))

    rows = [["DÉSIGNATION", "MONTANT"]]
    for designation, amount in invoice_lines(data):
        rows.append([Paragraph(designation, styles["Normal"]), format_price(amount)])
    rows.append(["TOTAL HT", f"{format_price(data.total_price)} €"])

    table = Table(rows, colWidths=[130 * mm, 40 * mm])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -2), 0.5, colors.lightgrey),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("BOX", (0, -1), (-1, -1), 1, colors.black),
                ("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke),
            ]
        )
    )
    story.append(table)
    story.append(Spacer(1, 30))

    story.append(Paragraph("<b>Conditions et modalités de paiement</b>", styles["Heading3"]))
    for condition in (
        f"{format_amount(rates['deposit_percent'])}% d'acompte à la réservation : {format_price(data.deposit_amount)} €",
        f"15 jours avant le départ : {format_price(data.balance_amount)} €",
        f"1 chèque de caution de {format_amount(rates['security_deposit'])} € à envoyer à notre adresse "
        "en même temps que le solde.",
        "(celui-ci ne sera pas encaissé) qui vous sera rendu dans les 8 jours après l'état des lieux.",
    ):
        story.append(Paragraph(condition, styles["Normal"]))

    doc.build(story)
    pdf = buffer.getvalue()
    buffer.close()
    return pdf
