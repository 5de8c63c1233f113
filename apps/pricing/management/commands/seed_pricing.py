from __future__ import annotations

import os
from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore

from apps.pricing.models import DatePeriod, PricingSettings, Season
from apps.users.models import User

DEFAULT_SEASONS = [
    ("Basse saison", Decimal("80"), "#10B981", 1),
    ("Moyenne saison", Decimal("120"), "#F59E0B", 2),
    ("Haute saison", Decimal("150"), "#F97316", 3),
    ("Très haute saison", Decimal("180"), "#EF4444", 4),
]

PERIODS_2025 = [
    (date(2025, 1, 1), date(2025, 4, 1), "Basse saison"),
    (date(2025, 4, 1), date(2025, 7, 1), "Moyenne saison"),
    (date(2025, 7, 1), date(2025, 8, 16), "Haute saison"),
    (date(2025, 8, 16), date(2025, 9, 1), "Très haute saison"),
    (date(2025, 9, 1), date(2025, 11, 1), "Moyenne saison"),
    (date(2025, 11, 1), date(2026, 1, 1), "Basse saison"),
]


class Command(BaseCommand):
    help = "Crée l'administrateur, les réglages par défaut et la grille tarifaire 2025"

    def handle(self, *args, **options):  # type: ignore
        admin_email = os.environ.get("ADMIN_SEED_EMAIL", "admin@maison-dalhias.fr")
        if User.objects.filter(email=admin_email).exists():
            self.stdout.write("Utilisateur admin déjà existant")
        else:
            User.objects.create_superuser(
                email=admin_email,
                password=os.environ.get("ADMIN_SEED_PASSWORD", "admin123"),
            )
            self.stdout.write(self.style.SUCCESS(f"Utilisateur admin créé : {admin_email}"))

        PricingSettings.load()

        if Season.objects.exists():
            self.stdout.write("Saisons déjà présentes, grille tarifaire inchangée")
            return

        with transaction.atomic():
            seasons = {
                name: Season.objects.create(name=name, price_per_night=price, color=color, order=order)
                for name, price, color, order in DEFAULT_SEASONS
            }
            DatePeriod.objects.bulk_create(
                DatePeriod(season=seasons[name], start_date=start, end_date=end, year=2025)
                for start, end, name in PERIODS_2025
            )

        self.stdout.write(
            self.style.SUCCESS(f"{len(seasons)} saisons et {len(PERIODS_2025)} plages de dates créées pour 2025")
        )
