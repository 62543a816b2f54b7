from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.categories.models import Category
from modules.listings.models import Listing
from modules.users.constants import UserRole
from modules.users.models import User

SEED_PASSWORD = "password123"

SEED_USERS = [
    ("buyer@example.com", "Alice Buyer", "+381601234567", UserRole.BUYER),
    ("seller@example.com", "Bob Seller", "+381609876543", UserRole.SELLER),
    ("admin@example.com", "Charlie Admin", "+381600000000", UserRole.ADMIN),
]

SEED_CATEGORIES = [
    ("Electronics", "electronics", "Phones, laptops, gadgets and more"),
    ("Clothing", "clothing", "Men's and women's apparel"),
    ("Home & Garden", "home-garden", "Furniture, decor and garden tools"),
    ("Books", "books", "Fiction, non-fiction and textbooks"),
    ("Sports", "sports", "Sporting goods and outdoor equipment"),
]

SEED_LISTINGS = [
    (
        "iPhone 14 Pro, excellent condition",
        "Used for 6 months. Comes with original box and charger. No scratches.",
        Decimal("499.99"),
        "electronics",
    ),
    (
        "Dell XPS 15 Laptop",
        "16 GB RAM, 512 GB SSD, Intel i7. Battery health 92%.",
        Decimal("879.00"),
        "electronics",
    ),
    (
        "Vintage Denim Jacket, Size M",
        "Genuine Levi's from the 90s. Great vintage look, minor fading.",
        Decimal("45.00"),
        "clothing",
    ),
    (
        "IKEA KALLAX Shelf Unit",
        "White, 4x4, disassembled for easy transport. All hardware included.",
        Decimal("60.00"),
        "home-garden",
    ),
    (
        "Clean Code by Robert C. Martin",
        "Paperback, like new. A must-read for every software developer.",
        Decimal("15.50"),
        "books",
    ),
    (
        "Wilson Tennis Racket",
        "Pro Staff 97. Grip size 3. Lightly used, freshly strung.",
        Decimal("120.00"),
        "sports",
    ),
]


class Command(BaseCommand):
    help = "Seed database with development data (safe to run repeatedly)."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users = self._seed_users()
        categories = self._seed_categories()
        listings_created = self._seed_listings(users[UserRole.SELLER], categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"categories={len(categories)}, "
                f"listings_created={listings_created}"
            )
        )

    def _seed_users(self) -> dict[str, User]:
        self.stdout.write("Creating users...")
        users: dict[str, User] = {}
        for email, name, phone_number, role in SEED_USERS:
            user, created = User.objects.get_or_create(
                email=email,
                defaults={
                    "name": name,
                    "phone_number": phone_number,
                    "role": role,
                    "is_staff": role == UserRole.ADMIN,
                },
            )
            if created:
                user.set_password(SEED_PASSWORD)
                user.save(update_fields=["password"])
            users[role] = user
        self.stdout.write(self.style.SUCCESS("Creating users... Done!"))
        return users

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        categories: dict[str, Category] = {}
        for name, slug, description in SEED_CATEGORIES:
            category, _ = Category.objects.get_or_create(
                slug=slug,
                defaults={"name": name, "description": description},
            )
            categories[slug] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_listings(self, seller: User, categories: dict[str, Category]) -> int:
        self.stdout.write("Creating listings...")
        created_count = 0
        for title, description, price, category_slug in SEED_LISTINGS:
            _, created = Listing.objects.get_or_create(
                seller=seller,
                title=title,
                defaults={
                    "description": description,
                    "price": price,
                    "category": categories[category_slug],
                },
            )
            created_count += int(created)
        self.stdout.write(self.style.SUCCESS("Creating listings... Done!"))
        return created_count
