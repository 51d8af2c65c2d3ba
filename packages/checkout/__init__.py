"""
Client-side checkout package.

Drives one pay control through order creation, the gateway checkout surface,
verification and the post-activation redirect.
"""
