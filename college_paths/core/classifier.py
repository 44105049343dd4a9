from __future__ import annotations

import re
from typing import Container, Iterable, Optional, Pattern, Sequence, Tuple

Rule = Tuple[Pattern[str], str]

UNDECIDED_MAJOR = "undecided"
UNSURE_CAREER = "not_sure"

MAJOR_LABELS = {
    "computer_science": "Computer Science",
    "engineering": "Engineering",
    "business": "Business",
    "accounting": "Accounting",
    "finance": "Finance",
    "marketing": "Marketing",
    "health_premed": "Pre-Med / Health Sciences",
    "nursing": "Nursing",
    "pharmacy": "Pharmacy",
    "dental_hygiene": "Dental Hygiene",
    "biology": "Biology",
    "physical_sciences": "Physical Sciences",
    "math": "Mathematics",
    "social_sciences": "Social Sciences",
    "psychology": "Psychology",
    "criminal_justice": "Criminal Justice",
    "social_work": "Social Work",
    "humanities": "Humanities",
    "arts": "Fine Arts",
    "communications": "Communications",
    "journalism": "Journalism",
    "education": "Education",
    "trades": "Trades/Vocational",
    "culinary": "Culinary Arts",
    "cosmetology": "Cosmetology",
    "automotive": "Automotive Technology",
    "architecture": "Architecture",
    "agriculture": "Agriculture",
    "hospitality": "Hospitality Management",
    UNDECIDED_MAJOR: "Undecided",
}

CAREER_TAGS = (
    "tech_engineer", "tech_pm", "data_analyst", "finance", "accounting", "consulting",
    "neurosurgery", "surgery", "medicine", "dentistry", "pharmacy", "veterinary", "optometry",
    "therapy", "healthcare", "healthcare_tech", "nursing", "law", "academia", "teaching",
    "social_work", "creative", "media", "entrepreneur", "government", "trades",
    "first_responder", "military", "aviation", "logistics", "real_estate", "sales",
    "corporate", "marketing", "architecture", "hospitality", "fitness", "beauty",
    "agriculture", "nonprofit", UNSURE_CAREER,
)

HEALTH_MAJORS = frozenset({"health_premed", "biology"})
VARIABLE_EARNINGS_MAJORS = frozenset({"arts", "humanities"})
MEDICAL_DOCTORATE_CAREERS = frozenset({"medicine", "surgery", "neurosurgery"})


def _rule(words: str, tag: str) -> Rule:
    return re.compile(rf"\b({words})\b", re.IGNORECASE), tag


def _abbreviation(letters: str, tag: str) -> Rule:
    return re.compile(rf"\b({letters})\b"), tag


# First match wins: specific phrases sit above the general ones containing them.
MAJOR_RULES: Sequence[Rule] = (
    _rule(r"nursing|nurse|rn|bsn|lpn|registered nurse|nurse practitioner", "nursing"),
    _rule(
        r"computer|software|programming|coding|developer|data science|cs|information technology"
        r"|cyber|web dev|machine learning|artificial intelligence",
        "computer_science",
    ),
    _rule(r"engineer|engineering|mechanical|electrical|civil|chemical|aerospace|biomedical|industrial", "engineering"),
    _rule(r"finance|financial|investment|banking|economics|econ", "finance"),
    _rule(r"marketing|advertising|brand|digital marketing", "marketing"),
    _rule(r"business|management|mba|entrepreneur|administration", "business"),
    _rule(r"accounting|accountant|cpa|bookkeeping", "accounting"),
    _rule(r"pharmacy|pharmacist|pharmd|pharmaceutical", "pharmacy"),
    _rule(r"dental hygien\w*|dental assistant", "dental_hygiene"),
    _rule(
        r"pre-?med|premed|medicine|doctor|physician|medical|health science|healthcare admin|public health",
        "health_premed",
    ),
    _rule(r"biology|bio|biochem|microbiology|molecular|genetics|neuroscience", "biology"),
    _rule(r"math|mathematics|statistics|actuarial", "math"),
    _rule(r"physics|chemistry|astronomy|geology|earth science|environmental science", "physical_sciences"),
    _rule(r"psychology|psych|behavioral science", "psychology"),
    _rule(r"social work|lcsw|msw|bsw", "social_work"),
    _rule(
        r"sociology|political science|anthropology|international relations|government|poli sci",
        "social_sciences",
    ),
    _rule(r"criminal justice|criminology|law enforcement|police|forensic|corrections", "criminal_justice"),
    _rule(r"education|teaching|teacher|pedagogy|elementary|secondary|early childhood", "education"),
    _rule(r"journalism|reporter|news|broadcast journalism", "journalism"),
    _rule(
        r"english|history|philosophy|literature|language|classics|religious studies|liberal arts",
        "humanities",
    ),
    _rule(
        r"arts?|fine arts?|studio arts?|music|theater|theatre|film|graphic design|creative|photography|dance",
        "arts",
    ),
    _rule(r"communications|media|public relations|broadcasting|speech", "communications"),
    _rule(r"architecture|architect|interior design|urban planning|landscape design", "architecture"),
    _rule(r"electrician|plumber|hvac|welding|welder|construction|carpentry|carpenter|machinist|cnc", "trades"),
    _rule(r"automotive|auto mechanic|diesel|collision|auto tech", "automotive"),
    _rule(r"culinary|chef|cooking|pastry|baking|food service", "culinary"),
    _rule(r"cosmetology|hair|stylist|esthetician|beauty|barber|nail tech|makeup", "cosmetology"),
    _rule(r"agriculture|farming|agribusiness|horticulture|animal science", "agriculture"),
    _rule(r"hospitality|hotel|tourism|event management|restaurant management", "hospitality"),
)

CAREER_RULES: Sequence[Rule] = (
    _rule(r"nursing|nurse|rn|bsn|lpn|registered nurse|nurse practitioner|np", "nursing"),
    _rule(
        r"software|developer|programmer|engineer|coding|web dev|data scientist|devops|sysadmin"
        r"|network admin|database|dba|qa|tester|cybersecurity|cloud|backend|frontend|full stack"
        r"|machine learning|ai engineer",
        "tech_engineer",
    ),
    _rule(r"product manager|product owner|ux|ui designer|scrum master|agile", "tech_pm"),
    _rule(r"data analyst|business analyst|analytics|statistician|actuary|quantitative", "data_analyst"),
    _rule(
        r"finance|banker|investment|trading|wall street|hedge fund|private equity|venture capital"
        r"|financial advisor|wealth management|cfo",
        "finance",
    ),
    _rule(r"accountant|accounting|cpa|auditor|tax|bookkeeper", "accounting"),
    _rule(r"consultant|consulting|mckinsey|bain|bcg|deloitte|pwc|kpmg|ernst & young|accenture", "consulting"),
    _rule(r"neurosurgeon|neurosurgery|brain surgeon|brain surgery", "neurosurgery"),
    _rule(
        r"surgeon|surgery|surgical|orthopedic surgeon|cardiac surgeon|trauma surgeon|plastic surgeon|general surgery",
        "surgery",
    ),
    _rule(
        r"doctor|physician|medical doctor|pediatrician|cardiologist|dermatologist|psychiatrist"
        r"|oncologist|anesthesiologist|radiologist",
        "medicine",
    ),
    _rule(r"dental hygienist|dental assistant|vet tech|veterinary tech|pharmacy tech|lab tech", "healthcare_tech"),
    _rule(r"dentist|dental|orthodontist|oral surgeon|periodontist", "dentistry"),
    _rule(r"pharmacist|pharmacy|pharmd", "pharmacy"),
    _rule(r"veterinarian|vet|veterinary|animal doctor", "veterinary"),
    _rule(r"optometrist|optometry|eye doctor", "optometry"),
    _rule(r"physical therapist|dpt|occupational therapist|speech therapist|slp|rehab", "therapy"),
    _rule(
        r"healthcare|health care|medical assistant|technician|radiology|sonographer|phlebotomist"
        r"|medical coder|health admin|hospital",
        "healthcare",
    ),
    _rule(r"lawyer|attorney|legal|paralegal|judge|prosecutor|public defender|corporate counsel", "law"),
    _rule(r"professor|academia|phd|research|scientist|researcher|postdoc", "academia"),
    _rule(r"teacher|teaching|educator|principal|school|tutor|special education", "teaching"),
    _rule(
        r"social worker|counselor|therapist|mental health|case manager|family services|child welfare|lcsw|lmft",
        "social_work",
    ),
    _rule(
        r"artist|musician|writer|filmmaker|photographer|actor|actress|animator|video editor"
        r"|graphic design|illustrator|creative director",
        "creative",
    ),
    _rule(
        r"content creator|influencer|streamer|youtuber|podcaster|social media|journalist|reporter|news|broadcasting",
        "media",
    ),
    _rule(r"entrepreneur|startup|founder|business owner|self-employed|freelance|small business", "entrepreneur"),
    _rule(
        r"government|federal|public sector|civil servant|policy|diplomat|city planner|urban planner",
        "government",
    ),
    _rule(
        r"electrician|plumber|hvac|carpenter|mechanic|welder|construction|contractor|trades|lineman"
        r"|ironworker|machinist|cnc|heavy equipment|crane operator|roofer|painter|mason",
        "trades",
    ),
    _rule(r"auto mechanic|automotive|car mechanic|diesel|collision repair|body shop", "trades"),
    _rule(
        r"police|cop|police officer|firefighter|emt|paramedic|first responder|detective|sheriff|state trooper"
        r"|corrections|prison",
        "first_responder",
    ),
    _rule(
        r"military|army|navy|air force|marines|coast guard|national guard|veteran|enlisted",
        "military",
    ),
    _rule(r"pilot|aviation|airline|flight attendant|air traffic|aerospace", "aviation"),
    _rule(
        r"truck driver|trucker|cdl|logistics|supply chain|warehouse|shipping|delivery|fedex|amazon",
        "logistics",
    ),
    _rule(r"real estate|realtor|property|broker|mortgage|appraiser", "real_estate"),
    _rule(
        r"sales|account executive|business development|bdr|sdr|retail|store manager",
        "sales",
    ),
    _rule(
        r"human resources|recruiter|talent|operations|office manager|administrative|executive assistant"
        r"|project manager|pmp",
        "corporate",
    ),
    _rule(
        r"marketing|brand|advertising|seo|growth|digital marketing|public relations|communications",
        "marketing",
    ),
    _rule(r"architect|architecture|interior design|landscape architect", "architecture"),
    _rule(
        r"chef|cook|culinary|restaurant|hotel|hospitality|event planner|catering|bartender|sommelier",
        "hospitality",
    ),
    _rule(
        r"personal trainer|fitness|gym|coach|athletic trainer|sports|yoga|pilates|nutritionist|dietitian",
        "fitness",
    ),
    _rule(
        r"cosmetologist|hair stylist|barber|esthetician|nail tech|makeup artist|beauty|salon|spa",
        "beauty",
    ),
    _rule(r"farmer|farming|agriculture|rancher|agricultural|agribusiness", "agriculture"),
    _rule(r"non-?profit|ngo|charity|foundation|advocacy|community organizer", "nonprofit"),
)


# Capitalised abbreviations only ("do", "it" and "pm" are ordinary words); tried after the keyword rules.
MAJOR_ABBREVIATIONS: Sequence[Rule] = (
    _abbreviation(r"IT|AI", "computer_science"),
)

CAREER_ABBREVIATIONS: Sequence[Rule] = (
    _abbreviation(r"MD|DO", "medicine"),
    _abbreviation(r"PM", "tech_pm"),
    _abbreviation(r"PT|OT", "therapy"),
    _abbreviation(r"EY", "consulting"),
    _abbreviation(r"UPS", "logistics"),
    _abbreviation(r"AE", "sales"),
    _abbreviation(r"HR", "corporate"),
    _abbreviation(r"PR", "marketing"),
)


def match_first(
    text: Optional[str],
    rules: Iterable[Rule],
    tags: Container[str],
    default: str,
    abbreviations: Iterable[Rule] = (),
) -> str:
    """Return the tag for ``text``: exact tag match, else first matching rule, else ``default``.

    Keyword rules see the lowercased text; abbreviation rules see it as written.
    """
    raw = (text or "").strip()
    lower = raw.lower()
    if not lower:
        return default
    if lower in tags:
        return lower
    for pattern, tag in rules:
        if pattern.search(lower):
            return tag
    for pattern, tag in abbreviations:
        if pattern.search(raw):
            return tag
    return default


class CategoryClassifier:
    """Ordered keyword rules over one canonical tag set."""

    def __init__(
        self, rules: Sequence[Rule], tags: Iterable[str], default: str, abbreviations: Sequence[Rule] = ()
    ):
        self.rules = tuple(rules)
        self.abbreviations = tuple(abbreviations)
        self.tags = frozenset(tags)
        self.default = default

    def classify(self, text: Optional[str]) -> str:
        return match_first(text, self.rules, self.tags, self.default, self.abbreviations)


MAJOR_CLASSIFIER = CategoryClassifier(MAJOR_RULES, MAJOR_LABELS, UNDECIDED_MAJOR, MAJOR_ABBREVIATIONS)
CAREER_CLASSIFIER = CategoryClassifier(CAREER_RULES, CAREER_TAGS, UNSURE_CAREER, CAREER_ABBREVIATIONS)


def classify_major(text: Optional[str]) -> str:
    return MAJOR_CLASSIFIER.classify(text)


def classify_career(text: Optional[str]) -> str:
    return CAREER_CLASSIFIER.classify(text)


def major_label(tag: str) -> str:
    return MAJOR_LABELS.get(tag, MAJOR_LABELS[UNDECIDED_MAJOR])
