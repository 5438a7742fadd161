from __future__ import annotations

from pydantic import BaseModel


class FaqEntry(BaseModel):
    question: str
    answer: str


FAQ_ENTRIES: tuple[FaqEntry, ...] = (
    FaqEntry(
        question="How do I buy credits?",
        answer=(
            "To buy credits, go to the 'Buy Credits' section, choose your desired "
            "amount, select a payment method (KPay or WavePay), make the payment, "
            "and upload a screenshot as proof. Your credits will be added after "
            "admin approval."
        ),
    ),
    FaqEntry(
        question="What payment methods do you accept?",
        answer=(
            "We currently accept KPay and WavePay transfers. After making the "
            "payment, you need to upload a screenshot of the transaction as proof."
        ),
    ),
    FaqEntry(
        question="How long does it take to get credits after payment?",
        answer=(
            "Credit approval typically takes 1-24 hours during business hours. "
            "Once approved by our admin, credits will be automatically added to "
            "your account."
        ),
    ),
    FaqEntry(
        question="What can I buy with credits?",
        answer=(
            "You can use credits to purchase various telecom products including "
            "data packages, minutes, points, bundled packages, and beautiful "
            "numbers from operators like ATOM, MPT, Mytel, and Ooredoo."
        ),
    ),
    FaqEntry(
        question="How do I check my order status?",
        answer=(
            "You can check your order status in the 'My Orders' section. Orders "
            "go through stages: Pending → Processing → Completed. You'll see "
            "updates and admin notes there."
        ),
    ),
    FaqEntry(
        question="What if my payment was deducted but credits weren't added?",
        answer=(
            "If your payment was successful but credits weren't added, please "
            "contact our admin through the contact option in your profile menu. "
            "Include your payment screenshot and transaction details."
        ),
    ),
    FaqEntry(
        question="Can I get a refund for my credits?",
        answer=(
            "Credit purchases are generally non-refundable. However, if there's "
            "an issue with your order or a technical problem, please contact our "
            "admin for assistance."
        ),
    ),
    FaqEntry(
        question="How do I use my credits to buy products?",
        answer=(
            "Browse the products section, select your desired item, enter your "
            "phone number, and confirm the purchase. The credits will be deducted "
            "from your account automatically."
        ),
    ),
    FaqEntry(
        question="What are beautiful numbers?",
        answer=(
            "Beautiful numbers are special phone numbers with attractive patterns "
            "like repeating digits (e.g., 09111111111) or sequential numbers. "
            "They're available for purchase from various operators."
        ),
    ),
    FaqEntry(
        question="Can I transfer credits to another user?",
        answer=(
            "Currently, credit transfers between users are not available. Each "
            "account's credits can only be used by the account owner."
        ),
    ),
    FaqEntry(
        question="What if I entered the wrong phone number for my order?",
        answer=(
            "If you entered an incorrect phone number, contact our admin "
            "immediately through the profile menu. We may be able to update it "
            "if the order hasn't been processed yet."
        ),
    ),
    FaqEntry(
        question="Are there any fees for using the platform?",
        answer=(
            "There are no additional fees for using our platform. The price you "
            "see for credits and products is the final price you pay."
        ),
    ),
)


def list_faq() -> list[FaqEntry]:
    return list(FAQ_ENTRIES)
