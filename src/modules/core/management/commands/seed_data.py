from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.options.models import Option
from modules.products.models import Product
from modules.rooms.models import Room


class Command(BaseCommand):
    help = "Seed database with rooms, products and options for development."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        rooms = self._seed_rooms()
        products = self._seed_products()
        extras = self._seed_options()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"rooms={len(rooms)}, "
                f"products={len(products)}, "
                f"options={len(extras)}"
            )
        )

    def _seed_rooms(self) -> list[Room]:
        self.stdout.write("Creating rooms...")
        rooms: list[Room] = []
        seed_rooms = [
            ("Mødelokale 1", "Stueetagen, 8 pladser", 1),
            ("Mødelokale 2", "Stueetagen, 12 pladser", 2),
            ("Auditoriet", "1. sal, 80 pladser", 101),
            ("Kantinen", "Bagbygningen", None),
            ("Bestyrelseslokalet", "3. sal", 301),
        ]
        for name, description, number in seed_rooms:
            room, _ = Room.objects.get_or_create(
                name=name, defaults={"description": description, "number": number}
            )
            rooms.append(room)
        self.stdout.write(self.style.SUCCESS("Creating rooms... Done!"))
        return rooms

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        # name, price, max per order, window (from_h, from_m, to_h, to_m)
        catalog = [
            ("Morgenmad", Decimal("65.00"), 40, (6, 0, 9, 30)),
            ("Frokostbuffet", Decimal("145.00"), 60, (8, 0, 10, 0)),
            ("Sandwich", Decimal("55.00"), 30, (7, 0, 11, 0)),
            ("Kaffe og te", Decimal("25.00"), 100, (0, 0, 23, 59)),
            ("Frugtkurv", Decimal("120.00"), 10, (7, 0, 14, 0)),
            ("Kage", Decimal("35.00"), 50, (8, 0, 13, 30)),
            ("Aftensmad", Decimal("225.00"), 40, (10, 0, 15, 0)),
            ("Sodavand", Decimal("20.00"), 100, (0, 0, 23, 59)),
        ]
        for name, price, max_quantity, window in catalog:
            product = Product.objects.filter(name=name).first()
            if product is None:
                product = Product(
                    name=name,
                    price=price,
                    availability=random.randint(max_quantity, max_quantity * 4),
                    max_order_quantity=max_quantity,
                )
                product.set_order_window(*window)
                product.save()
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_options(self) -> list[Option]:
        self.stdout.write("Creating options...")
        extras: list[Option] = []
        catalog = [
            ("Projektor", Decimal("0.00"), 1),
            ("Whiteboard", Decimal("0.00"), 2),
            ("Videokonference", Decimal("150.00"), 1),
            ("Ekstra stole", Decimal("10.00"), 20),
            ("Borddug", Decimal("25.00"), 10),
        ]
        for name, price, max_quantity in catalog:
            option, _ = Option.objects.get_or_create(
                name=name,
                defaults={
                    "price": price,
                    "availability": random.randint(max_quantity, max_quantity * 5),
                    "max_order_quantity": max_quantity,
                },
            )
            extras.append(option)
        self.stdout.write(self.style.SUCCESS("Creating options... Done!"))
        return extras
