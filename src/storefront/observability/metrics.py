from prometheus_client import Counter, Histogram

# Business metrics
storefront_checkout_total = Counter(
    "storefront_checkout_total",
    "Checkout attempts by outcome",
    ["status"],  # 'completed' or the error code
)

storefront_checkout_duration_seconds = Histogram(
    "storefront_checkout_duration_seconds",
    "Checkout duration in seconds",
)

storefront_receipt_failures_total = Counter(
    "storefront_receipt_failures_total",
    "Receipts that could not be handed off or delivered",
)
