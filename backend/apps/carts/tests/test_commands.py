import unittest
from apps.carts.commands import (
    MAX_CART_QUANTITY,
    AddCartItemCommand,
    RemoveCartItemCommand,
    SetCartItemQuantityCommand,
)
from apps.carts.serializers import (
    AddCartItemSerializer,
    RemoveCartItemSerializer,
    SetCartItemQuantitySerializer,
)


class CartCommandTests(unittest.TestCase):
    def test_add_command_defaults_quantity_to_one(self):
        cmd = AddCartItemCommand.from_validated({"productId": " p1 "})
        self.assertEqual(cmd, AddCartItemCommand(product_id="p1", quantity=1))

    def test_add_command_rejects_non_positive_quantity(self):
        with self.assertRaises(ValueError):
            AddCartItemCommand("p1", 0)
        with self.assertRaises(ValueError):
            AddCartItemCommand("p1", True)

    def test_remove_command_requires_product(self):
        with self.assertRaises(ValueError):
            RemoveCartItemCommand.from_validated({})

    def test_set_quantity_command_zero_removes(self):
        cmd = SetCartItemQuantityCommand.from_validated("p1", {"quantity": 0})
        self.assertTrue(cmd.removes_item)
        self.assertFalse(SetCartItemQuantityCommand("p1", 3).removes_item)

    def test_set_quantity_command_rejects_negative(self):
        with self.assertRaises(ValueError):
            SetCartItemQuantityCommand("p1", -1)

    def test_commands_reject_quantity_above_cap(self):
        with self.assertRaises(ValueError):
            AddCartItemCommand("p1", MAX_CART_QUANTITY + 1)
        with self.assertRaises(ValueError):
            SetCartItemQuantityCommand("p1", MAX_CART_QUANTITY + 1)
        self.assertEqual(AddCartItemCommand("p1", MAX_CART_QUANTITY).quantity, MAX_CART_QUANTITY)


class CartSerializerValidationTests(unittest.TestCase):
    def _errors(self, serializer_class, data):
        serializer = serializer_class(data=data)
        self.assertFalse(serializer.is_valid())
        return serializer.errors

    def test_add_accepts_valid_payload(self):
        serializer = AddCartItemSerializer(data={"productId": "  p1 ", "quantity": 3})
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data, {"productId": "p1", "quantity": 3})

    def test_add_defaults_quantity(self):
        serializer = AddCartItemSerializer(data={"productId": "p1"})
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["quantity"], 1)

    def test_add_rejects_missing_or_blank_product(self):
        self.assertIn("productId", self._errors(AddCartItemSerializer, {}))
        self.assertIn("productId", self._errors(AddCartItemSerializer, {"productId": "   "}))
        self.assertIn("productId", self._errors(AddCartItemSerializer, {"productId": 12}))

    def test_add_rejects_non_integer_quantities(self):
        for bad in (0, -1, "2", 1.5, True, None):
            with self.subTest(quantity=bad):
                errors = self._errors(AddCartItemSerializer, {"productId": "p1", "quantity": bad})
                self.assertIn("quantity", errors)

    def test_remove_requires_product(self):
        self.assertIn("productId", self._errors(RemoveCartItemSerializer, {"quantity": 1}))

    def test_set_quantity_allows_zero_only_as_lower_bound(self):
        self.assertTrue(SetCartItemQuantitySerializer(data={"quantity": 0}).is_valid())
        self.assertIn("quantity", self._errors(SetCartItemQuantitySerializer, {"quantity": -1}))
        self.assertIn("quantity", self._errors(SetCartItemQuantitySerializer, {}))

    def test_quantities_above_cap_are_rejected(self):
        for bad in (MAX_CART_QUANTITY + 1, 2**31, 10**20):
            with self.subTest(quantity=bad):
                self.assertIn(
                    "quantity",
                    self._errors(AddCartItemSerializer, {"productId": "p1", "quantity": bad}),
                )
                self.assertIn(
                    "quantity", self._errors(SetCartItemQuantitySerializer, {"quantity": bad})
                )
        serializer = SetCartItemQuantitySerializer(data={"quantity": MAX_CART_QUANTITY})
        self.assertTrue(serializer.is_valid(), serializer.errors)
