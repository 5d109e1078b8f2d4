"""Bundled additive reference data."""

from nutrition_scoring.domain.additives import AdditiveDefinition, RiskTier

DEFAULT_DEDUCTIONS: dict[RiskTier, int] = {
    RiskTier.GREEN: 0,
    RiskTier.YELLOW: 5,
    RiskTier.ORANGE: 10,
    RiskTier.RED: 20,
}


def _entry(
    e_number: str | None,
    name: str,
    tier: RiskTier,
    description: str,
    *health_impacts: str,
) -> AdditiveDefinition:
    return AdditiveDefinition(
        e_number=e_number,
        name=name,
        risk_tier=tier,
        description=description,
        point_deduction=DEFAULT_DEDUCTIONS[tier],
        health_impacts=health_impacts,
    )


_G, _Y, _O, _R = RiskTier.GREEN, RiskTier.YELLOW, RiskTier.ORANGE, RiskTier.RED

SEED_ADDITIVES: tuple[AdditiveDefinition, ...] = (
    _entry(
        "E300",
        "Ascorbic acid (Vitamin C)",
        _G,
        "Natural antioxidant, vitamin C",
        "Antioxidant properties",
        "Essential vitamin",
    ),
    _entry(
        "E301",
        "Sodium ascorbate",
        _G,
        "Sodium salt of vitamin C, antioxidant",
        "Antioxidant properties",
    ),
    _entry(
        "E306",
        "Tocopherols (Vitamin E)",
        _G,
        "Natural antioxidant, vitamin E",
        "Antioxidant properties",
        "Essential vitamin",
    ),
    _entry(
        "E330",
        "Citric acid",
        _G,
        "Natural acid found in citrus fruits",
        "Natural preservative",
    ),
    _entry(
        "E440",
        "Pectin",
        _G,
        "Natural fiber found in fruits",
        "Natural thickener",
        "Dietary fiber",
    ),
    _entry(
        "E415",
        "Xanthan gum",
        _G,
        "Natural thickener produced by fermentation",
        "Natural thickener",
    ),
    _entry(
        "E410",
        "Locust bean gum",
        _G,
        "Natural thickener from carob seeds",
        "Natural thickener",
        "Dietary fiber",
    ),
    _entry(
        "E322",
        "Lecithin",
        _Y,
        "Emulsifier, usually from soy or sunflower",
        "Generally safe",
        "May cause allergic reactions in sensitive individuals",
    ),
    _entry(
        "E202",
        "Potassium sorbate",
        _Y,
        "Preservative, antimicrobial agent",
        "Effective preservative",
        "May cause skin irritation in large amounts",
    ),
    _entry(
        "E211",
        "Sodium benzoate",
        _Y,
        "Preservative, antimicrobial agent",
        "Effective preservative",
        "May form benzene when combined with vitamin C",
    ),
    _entry(
        "E407",
        "Carrageenan",
        _Y,
        "Thickener extracted from seaweed",
        "May cause digestive issues",
        "Inflammatory potential in processed form",
    ),
    _entry(
        "E412",
        "Guar gum",
        _Y,
        "Natural thickener from guar beans",
        "May cause digestive upset in large quantities",
    ),
    _entry(
        "E414",
        "Acacia gum (Gum arabic)",
        _Y,
        "Natural thickener from acacia trees",
        "Generally safe",
        "May cause allergic reactions",
    ),
    _entry(
        "E249",
        "Potassium nitrite",
        _O,
        "Preservative used in processed meats",
        "May form nitrosamines (carcinogenic)",
        "Linked to cancer risk",
    ),
    _entry(
        "E250",
        "Sodium nitrite",
        _O,
        "Preservative used in processed meats",
        "May form nitrosamines (carcinogenic)",
        "Linked to cancer risk",
    ),
    _entry(
        "E621",
        "Monosodium glutamate (MSG)",
        _O,
        "Flavor enhancer",
        "May cause headaches",
        "Neurotoxicity concerns",
    ),
    _entry(
        "E150d",
        "Caramel IV (ammonia sulfite)",
        _O,
        "Artificial coloring agent",
        "Contains 4-methylimidazole (potentially carcinogenic)",
    ),
    _entry(
        "E319",
        "TBHQ (tert-Butylhydroquinone)",
        _O,
        "Synthetic antioxidant",
        "May cause DNA damage",
        "Potential endocrine disruption",
    ),
    _entry(
        "E320",
        "BHA (Butylated hydroxyanisole)",
        _O,
        "Synthetic antioxidant",
        "Possible carcinogen",
        "Endocrine disruption",
    ),
    _entry(
        "E321",
        "BHT (Butylated hydroxytoluene)",
        _O,
        "Synthetic antioxidant",
        "Possible carcinogen",
        "May cause hyperactivity",
    ),
    _entry(
        "E102",
        "Tartrazine (Yellow 5)",
        _R,
        "Artificial yellow coloring",
        "Hyperactivity in children",
        "Allergic reactions",
        "Asthma triggers",
    ),
    _entry(
        "E110",
        "Sunset Yellow (Yellow 6)",
        _R,
        "Artificial orange/yellow coloring",
        "Hyperactivity in children",
        "Allergic reactions",
    ),
    _entry(
        "E129",
        "Allura Red (Red 40)",
        _R,
        "Artificial red coloring",
        "Hyperactivity in children",
        "Allergic reactions",
    ),
    _entry(
        "E133",
        "Brilliant Blue (Blue 1)",
        _R,
        "Artificial blue coloring",
        "Hyperactivity in children",
        "Chromosomal damage",
    ),
    _entry(
        "E951",
        "Aspartame",
        _R,
        "Artificial sweetener",
        "Potential neurotoxicity",
        "Linked to headaches",
    ),
    _entry(
        "E954",
        "Saccharin",
        _R,
        "Artificial sweetener",
        "Potential carcinogen",
    ),
    _entry(
        "E952",
        "Cyclamate",
        _R,
        "Artificial sweetener",
        "Banned in US",
        "Potential carcinogen",
    ),
    _entry(
        None,
        "High fructose corn syrup",
        _R,
        "Processed sweetener from corn",
        "Obesity risk",
        "Diabetes risk",
        "Metabolic syndrome",
    ),
    _entry(
        None,
        "Partially hydrogenated oils",
        _R,
        "Trans fats",
        "Heart disease",
        "Increased LDL cholesterol",
    ),
    _entry(
        None,
        "Artificial flavor",
        _O,
        "Generic artificial flavoring",
        "Unknown chemical compounds",
        "Potential allergens",
    ),
    _entry(
        None,
        "Natural flavor",
        _Y,
        "Natural flavoring compounds",
        "Generally safe",
        "May contain allergens",
    ),
    _entry(
        None,
        "Sodium phosphates",
        _O,
        "Preservative and emulsifier",
        "Kidney damage risk",
        "Bone health concerns",
    ),
    _entry(
        "E338",
        "Phosphoric acid",
        _O,
        "Acidifier, common in sodas",
        "Bone density loss",
        "Tooth enamel erosion",
    ),
    _entry(
        "E200",
        "Sorbic acid",
        _Y,
        "Natural antimicrobial preservative",
        "Generally safe",
        "May cause skin irritation",
    ),
    _entry(
        "E203",
        "Calcium sorbate",
        _Y,
        "Calcium salt of sorbic acid",
        "Generally safe",
    ),
    _entry(
        "E210",
        "Benzoic acid",
        _Y,
        "Natural preservative",
        "May cause allergic reactions",
    ),
    _entry(
        "E100",
        "Curcumin",
        _G,
        "Natural yellow coloring from turmeric",
        "Anti-inflammatory properties",
    ),
    _entry(
        "E160a",
        "Beta-carotene",
        _G,
        "Natural orange coloring, vitamin A precursor",
        "Vitamin A precursor",
    ),
    _entry(
        "E163",
        "Anthocyanins",
        _G,
        "Natural purple/red coloring from fruits",
        "Antioxidant properties",
    ),
)
