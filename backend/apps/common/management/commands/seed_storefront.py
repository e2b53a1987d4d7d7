from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from apps.carts.models import Cart, CartItem
from apps.catalog.container import build_product_service
from apps.catalog.models import Product
from apps.common import get_logger
from apps.users.models import User

logger = get_logger(__name__).bind(component="common", layer="seed")

TEST_USER = {
    "username": "test.user",
    "email": "test.user@example.com",
    "name": "Test User",
}
TEST_USER_PASSWORD = "TestPass123"

PRODUCTS = [
    (
        "Wireless Headphones",
        "High-quality wireless headphones with noise cancellation",
        "199.99",
        "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=500",
    ),
    (
        "Smart Watch",
        "Feature-rich smartwatch with health tracking",
        "299.99",
        "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=500",
    ),
    (
        "Laptop Stand",
        "Ergonomic aluminum laptop stand",
        "49.99",
        "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=500",
    ),
    (
        "Mechanical Keyboard",
        "RGB mechanical keyboard with Cherry MX switches",
        "149.99",
        "https://images.unsplash.com/photo-1511467687858-23d96c32e4ae?w=500",
    ),
    (
        "USB-C Hub",
        "7-in-1 USB-C hub with multiple ports",
        "79.99",
        "https://images.unsplash.com/photo-1625948515291-69613efd103f?w=500",
    ),
    (
        "Wireless Mouse",
        "Ergonomic wireless mouse with precision tracking",
        "59.99",
        "https://images.unsplash.com/photo-1527814050087-3793815479db?w=500",
    ),
    (
        "Monitor",
        "27-inch 4K UHD monitor with HDR support",
        "449.99",
        "https://images.unsplash.com/photo-1527443224154-c4a3942d3acf?w=500",
    ),
    (
        "Webcam",
        "1080p HD webcam with auto-focus",
        "89.99",
        "https://images.unsplash.com/photo-1589739900243-c1e4f7f01921?w=500",
    ),
    (
        "Desk Lamp",
        "LED desk lamp with adjustable brightness",
        "39.99",
        "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=500",
    ),
    (
        "Phone Holder",
        "Adjustable phone holder for desk",
        "24.99",
        "https://images.unsplash.com/photo-1601784551446-20c9e07cdbdb?w=500",
    ),
    (
        "Cable Organizer",
        "Cable management system for clean desk",
        "19.99",
        "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=500",
    ),
    (
        "Portable SSD",
        "1TB portable SSD with fast transfer speeds",
        "129.99",
        "https://images.unsplash.com/photo-1597872200969-2b65d56bd16b?w=500",
    ),
]


class Command(BaseCommand):
    help = "Seed the storefront catalog, a test user and the user's cart."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )
        parser.add_argument(
            "--password",
            default=TEST_USER_PASSWORD,
            help="Password for the seeded test user",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            self._seed(options)
        # Cached listing pages predate the seeded rows.
        build_product_service().invalidate_cache()
        self.stdout.write(self.style.SUCCESS("Storefront seed completed."))

    def _seed(self, options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CartItem.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()
            User.objects.filter(email=TEST_USER["email"]).delete()

        self.stdout.write("Seeding test user...")
        user, created = User.objects.get_or_create(
            email=TEST_USER["email"],
            defaults={
                "username": TEST_USER["username"],
                "name": TEST_USER["name"],
                "email_verified": timezone.now(),
            },
        )
        if created:
            user.set_password(options["password"])
            user.save(update_fields=["password"])
        logger.info("Seeded test user", user_id=user.id, created=created)

        self.stdout.write("Seeding products...")
        created_count = 0
        for name, description, price, image_url in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                id=slugify(name),
                defaults=dict(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    image_url=image_url,
                ),
            )
            created_count += int(was_created)
        logger.info("Seeded products", total=len(PRODUCTS), created=created_count)

        self.stdout.write("Ensuring cart for test user...")
        Cart.objects.get_or_create(user=user)
