"""
Billing package - plans, subscriptions and the payment ledger.

This package integrates with:
- Razorpay: Order creation and checkout signature verification

Subscriptions and payments are written only by VerificationService, after a
checkout signature has been verified.
"""
