"""
Lease contract PDF

Seasonal rental agreement between the landlord (bailleur) and the primary
client (preneur). Identity of the landlord and the description of the
property come from the ``LANDLORD`` and ``RENTAL_PROPERTY`` settings, the
amounts from the booking's computed prices.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from xml.sax.saxutils import escape

from django.conf import settings  # type: ignore
from reportlab.lib.pagesizes import A4  # type: ignore
from reportlab.lib.styles import getSampleStyleSheet  # type: ignore
from reportlab.lib.units import mm  # type: ignore
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # type: ignore

from .data import ContractData
from .formatting import format_amount, format_date, format_date_long, number_to_words

DEPOSIT_MONTHS_BEFORE_ARRIVAL = 2
BALANCE_DAYS_BEFORE_ARRIVAL = 15


def deposit_deadline(start_date: date) -> date:
    """Same day two months before arrival, clamped to the end of the month."""
    month = start_date.month - DEPOSIT_MONTHS_BEFORE_ARRIVAL
    year = start_date.year
    if month < 1:
        month += 12
        year -= 1
    day = min(start_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def balance_deadline(start_date: date) -> date:
    return start_date - timedelta(days=BALANCE_DAYS_BEFORE_ARRIVAL)


def _included_charges(data: ContractData, rates: dict) -> list[str]:
    charges = []
    if data.tourist_tax_price > 0:
        charges.append(
            f"- La taxe de séjour {format_amount(rates['tourist_tax_per_adult_night'])} euro/jour/pers : "
            f"{format_amount(data.tourist_tax_price)} euros"
        )
    if data.cleaning_price > 0:
        charges.append(f"- Le ménage de fin de séjour : {format_amount(data.cleaning_price)} euros")
    elif data.cleaning_offered:
        charges.append("- Le ménage de fin de séjour : offert")
    if data.linen_price > 0:
        charges.append(
            f"- La location de linge de maison {format_amount(rates['linen_per_person'])} euros/pers : "
            f"{format_amount(data.linen_price)} euros"
        )
    elif data.linen_offered:
        charges.append("- La location de linge de maison : offerte")
    return charges


def contract_sections(data: ContractData) -> list[tuple[str, list[str]]]:
    """Numbered sections of the lease as (title, paragraphs)."""
    landlord = settings.LANDLORD
    rental = settings.RENTAL_PROPERTY
    rates = settings.RENTAL_RATES
    occupants = data.occupants_count
    total_words = number_to_words(int(data.total_price.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
    security_deposit = int(Decimal(str(rates["security_deposit"])))

    rent = [
        f"Les Parties ont convenu de fixer le loyer à {format_amount(data.total_price)} Euros "
        f"({total_words} euros) pour l'intégralité de la période de location.",
        "Le loyer ci-dessus comprend, pour toute la durée de la location, le paiement de toutes les charges "
        "locatives.",
    ]
    charges = _included_charges(data, rates)
    if charges:
        rent.append("Il comprend aussi :")
        rent.extend(charges)

    return [
        (
            "1. OBJET DU CONTRAT DE LOCATION SAISONNIÈRE",
            [
                "Les parties conviennent que la location faisant l'objet des présentes est une location "
                "saisonnière, dont la durée ne peut excéder 90 jours. Le Preneur ne pourra en aucun cas "
                "se prévaloir des dispositions applicables aux locations à usage d'habitation principale.",
            ],
        ),
        (
            "2. DESCRIPTION DU LOGEMENT",
            [
                f"Le logement faisant l'objet des présentes est une : {escape(rental['type'])}, "
                f"situé {escape(rental['contract_address'])}.",
                f"- Nombre de pièces principales : {rental['rooms']}",
                f"- Nombre de chambres : {rental['bedrooms']}",
                f"- Surface habitable : {escape(rental['surface'])}",
                f"Site et référence de l'annonce : {escape(rental['website'])}",
            ],
        ),
        (
            "3. NOMBRE D'OCCUPANTS",
            [
                f"Le bien est loué pour {occupants} occupant{'s' if occupants > 1 else ''}. Le Preneur "
                "s'engage expressément à ne pas dépasser ce nombre sans autorisation du propriétaire.",
            ],
        ),
        (
            "4. PÉRIODE DE LOCATION",
            [
                "Le Bailleur loue au Preneur le logement saisonnier",
                f"du {format_date_long(data.start_date)} à 16h00",
                f"au {format_date_long(data.end_date)} à 11h00, date et heure à laquelle le Preneur "
                "s'engage à avoir intégralement libéré le logement.",
            ],
        ),
        (
            "5. REMISE DES CLÉS",
            [
                "Le Bailleur et le Preneur définissent les modalités de remise des clés suivantes :",
                "Remise des clés au Preneur à l'arrivée : Arrivée autonome via boîtier",
                "Remise des clés au Bailleur au départ : Départ autonome via boîtier",
            ],
        ),
        ("6. TARIF DE LA LOCATION ET CHARGES", rent),
        (
            "7. RÉSERVATION",
            [
                "Afin de procéder à la réservation du logement, le Preneur retourne au Bailleur le présent "
                "contrat paraphé à chaque page et signé accompagné du versement d'arrhes à hauteur de "
                f"{format_amount(data.deposit_amount)} Euros, à verser impérativement avant le "
                f"{format_date(deposit_deadline(data.start_date))} (2 mois avant l'arrivée), par le moyen "
                "suivant :",
                "- Chèque à l'ordre du Bailleur à l'adresse du dessus",
                f"- Virement sur le compte (IBAN et code BIC) {escape(landlord['iban'])} "
                f"BIC : {escape(landlord['bic'])}",
            ],
        ),
        (
            "8. RÈGLEMENT DU SOLDE DU LOYER",
            [
                f"Le solde du montant du loyer, soit {format_amount(data.balance_amount)} Euros sera versé par "
                f"le Preneur au plus tard le {format_date(balance_deadline(data.start_date))}, par le moyen "
                "suivant :",
                "- Chèque à l'ordre du Bailleur",
                "- Virement sur le compte (IBAN et BIC) : voir au dessus",
                "- Espèces",
            ],
        ),
        (
            "9. DÉPÔT DE GARANTIE",
            [
                "Au plus tard lors du solde du loyer, le Preneur remettra au Bailleur un chèque d'un montant "
                f"de {security_deposit} Euros ({number_to_words(security_deposit)} euros) à l'ordre du "
                "Bailleur à titre de dépôt de garantie destiné à couvrir les éventuels dommages locatifs.",
                "Sont compris comme dommages locatifs, tous dommages, dégradations du logement, ainsi que les "
                "dommages, pertes ou vols causés aux biens mobiliers garnissant l'hébergement, pendant la "
                "période de location.",
                "En l'absence de dommages locatifs le dépôt de garantie sera restitué au Preneur dans un délai "
                "maximum de 15 jours après son départ.",
            ],
        ),
        (
            "10. CESSION ET SOUS-LOCATION",
            [
                "Le présent contrat de location saisonnière est conclu au profit du seul Preneur signataire "
                "des présentes. La cession du bail, sous-location totale ou partielle, sont rigoureusement "
                "interdites.",
            ],
        ),
        (
            "11. ÉTAT DES LIEUX",
            [
                "<b>État des lieux réalisé sans la présence du Bailleur</b>",
                "Un état des lieux sera mis à disposition du Preneur qui aura alors 48 heures pour faire des "
                "contestations éventuelles, par sms, email, courrier. À défaut de contestation par le Preneur "
                "dans un délai de 48 heures, l'état des lieux établi par le Bailleur sera réputé accepté par "
                "le Preneur.",
                "Le Preneur établira seul l'état des lieux de sortie et le transmettra le jour de sortie au "
                "Bailleur. Le Bailleur pourra contester l'état des lieux dans un délai courant jusqu'à "
                "l'arrivée du prochain locataire, dans une limite de 48 heures.",
            ],
        ),
        (
            "12. OBLIGATIONS DU PRENEUR",
            [
                "Le Preneur fera un usage paisible du logement loué. Il entretiendra le logement loué et le "
                "rendra en bon état de propreté. Il devra respecter le voisinage.",
                "Il s'engage à faire un usage normal et raisonnable des moyens de confort (chauffage, "
                "climatisation, eau, etc.), ainsi que des équipements (électroménager, multimédia, cuisine, "
                "etc.) mis à sa disposition.",
                "Il lui est interdit de faire une copie des clés remises par le Bailleur.",
                "Il s'engage à informer le Bailleur dans les meilleurs délais de toute panne, dommage, "
                "incident, ou dysfonctionnement.",
            ],
        ),
        (
            "13. ANIMAUX DE COMPAGNIE",
            [
                "La présence d'animaux de compagnie dans l'hébergement est strictement interdite, quelle que "
                "soit sa durée, sauf autorisation expresse et écrite du Bailleur.",
            ],
        ),
        (
            "14. OBLIGATIONS DU BAILLEUR",
            [
                "Le Bailleur s'engage à maintenir la location faisant l'objet du présent contrat dans un état "
                "satisfaisant d'entretien, de propreté et de sécurité.",
                "Il devra s'assurer que le Preneur bénéficie d'une jouissance pleine et entière du bien loué, "
                "sur la période. Il veillera à la remise des clés. Il s'abstiendra de perturber le confort ou "
                "la tranquillité du Preneur pendant la durée du séjour.",
            ],
        ),
        (
            "15. ASSURANCE",
            [
                "Le Preneur indique bénéficier d'une assurance couvrant les risques locatifs. Une copie de la "
                "police d'assurance pourra être demandée par le Bailleur au Preneur lors de la réservation ou "
                "à l'entrée dans les lieux.",
            ],
        ),
        (
            "16. RÉSILIATION",
            [
                "En cas de manquement par le Preneur à l'une de ses obligations contractuelles, le présent bail "
                "sera résilié de plein droit. Cette résiliation prendra effet après un délai de 48 heures après "
                "une simple sommation par lettre recommandée ou lettre remise en main propre restée "
                "infructueuse.",
            ],
        ),
        (
            "17. DOMICILE",
            [
                "Pour l'exécution des présentes, le Bailleur et le Preneur font élection de domicile dans leurs "
                "domiciles respectifs, indiqués en en-tête des présentes. Toutefois, en cas de litige, le "
                "tribunal du domicile du Bailleur sera seul compétent. Le présent contrat est soumis à la loi "
                "française.",
            ],
        ),
    ]


def generate_contract(data: ContractData, *, signed_on: date | None = None) -> bytes:
    landlord = settings.LANDLORD
    client = data.client
    signed_on = signed_on or date.today()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        title="Contrat de location de vacances",
    )
    styles = getSampleStyleSheet()
    body = styles["BodyText"]
    story = [
        Paragraph("Contrat de location de vacances", styles["Title"]),
        Spacer(1, 10),
        Paragraph("<b>ENTRE LES SOUSSIGNÉS :</b>", body),
        Paragraph(
            f"{escape(landlord['name'])}, demeurant {escape(landlord['address_line1'])}, "
            f"{escape(landlord['address_line2'])}",
            body,
        ),
        Paragraph(f"Né(e) le {escape(landlord['birth_date'])}", body),
        Paragraph(f"Téléphone portable : {escape(landlord['phone'])}", body),
        Paragraph(f"Email : {escape(landlord['email'])}", body),
        Paragraph("<i>(le Bailleur)</i>", body),
        Spacer(1, 6),
        Paragraph("<b>et</b>", body),
        Spacer(1, 6),
        Paragraph(
            f"{escape(client.full_name)}, demeurant {escape(client.address)}, "
            f"{escape(client.postal_code)} {escape(client.city)}, {escape(client.country)},",
            body,
        ),
    ]
    if client.phone:
        story.append(Paragraph(f"Téléphone portable : {escape(client.phone)}", body))
    story.append(Paragraph("<i>(le Preneur)</i>", body))
    story.append(Spacer(1, 10))

    for title, paragraphs in contract_sections(data):
        story.append(Paragraph(f"<b>{title}</b>", styles["Heading4"]))
        for text in paragraphs:
            story.append(Paragraph(text, body))

    story.append(Spacer(1, 10))
    story.append(Paragraph("Réalisé en 2 exemplaires", body))
    story.append(Spacer(1, 15))

    signatures = Table(
        [
            ["Le Bailleur Signature", "Le Preneur Signature"],
            ["lu et approuvé", "lu et approuvé"],
        ],
        colWidths=[85 * mm, 85 * mm],
        rowHeights=[8 * mm, 25 * mm],
    )
    signatures.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Oblique"),
                ("VALIGN", (0, 1), (-1, 1), "BOTTOM"),
            ]
        )
    )
    story.append(signatures)
    story.append(Spacer(1, 10))
    story.append(Paragraph(f"Date : {format_date_long(signed_on)}", body))

    doc.build(story)
    pdf = buffer.getvalue()
    buffer.close()
    return pdf
