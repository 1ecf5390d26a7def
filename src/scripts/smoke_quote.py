from src.data.load import load_underwriting_data
from src.pricing.quote import QuoteCalculator
from src.utils.config import get_paths

# Final-expense scenario from tests/test_regression.py against the bundled dataset
calculator = QuoteCalculator(load_underwriting_data(get_paths().default_dataset))

quotes = calculator.calculate_quotes(
    {
        "age": 78,
        "gender": "male",
        "state": "TX",
        "coverage_amount": 10000,
        "product_type": "fe",
        "health_class": "standard",
        "nicotine_use": False,
        "modality": "monthly",
    }
)

print("Carriers:", calculator.list_carriers())
for q in quotes:
    print(q.carrier, q.product, q.premium, q.modality)
    print(q.breakdown)
