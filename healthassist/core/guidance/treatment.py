"""
Treatment Plan Module

Static home-care plans for a fixed set of common conditions, with a
generic fallback for anything else. General guidance only.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from healthassist.core.validation import require_text
from healthassist.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MedicationDose:
    name: str
    dosage: str
    frequency: str
    duration: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class TreatmentPlan:
    """Home-care plan for one condition."""
    condition: str
    duration: str
    diet: Tuple[str, ...]
    medications: Tuple[MedicationDose, ...]
    hydration: str
    rest: str
    activities: Tuple[str, ...] = field(default_factory=tuple)
    prevention: Tuple[str, ...] = field(default_factory=tuple)
    follow_up: str = ""
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "condition": self.condition,
            "duration": self.duration,
            "diet": list(self.diet),
            "medications": [m.to_dict() for m in self.medications],
            "hydration": self.hydration,
            "rest": self.rest,
            "activities": list(self.activities),
            "prevention": list(self.prevention),
            "follow_up": self.follow_up,
            "is_fallback": self.is_fallback,
        }


_PARACETAMOL_COLD = MedicationDose("Paracetamol", "500mg", "Every 6-8 hours", "3-5 days (as needed)")

TREATMENT_PLANS: Tuple[TreatmentPlan, ...] = (
    TreatmentPlan(
        condition="Common Cold",
        duration="7-10 days",
        diet=(
            "Warm soups and broths",
            "Plenty of fluids (water, herbal teas)",
            "Vitamin C rich foods (oranges, lemons)",
            "Avoid cold and processed foods",
            "Light, easily digestible meals",
        ),
        medications=(_PARACETAMOL_COLD,),
        hydration="Drink 8-10 glasses of water daily. Include warm fluids like ginger tea.",
        rest="Get 7-9 hours of sleep. Rest as much as possible to help recovery.",
        activities=(
            "Avoid strenuous exercise",
            "Light walking is okay",
            "Avoid crowded places",
            "Practice good hygiene",
        ),
        prevention=(
            "Wash hands frequently",
            "Avoid close contact with sick people",
            "Cover mouth when coughing/sneezing",
            "Maintain good immune health",
        ),
        follow_up="If symptoms persist beyond 10 days or worsen, consult a doctor.",
    ),
    TreatmentPlan(
        condition="Fever",
        duration="3-5 days",
        diet=(
            "Light, easily digestible foods",
            "Plenty of fluids",
            "Coconut water for electrolytes",
            "Avoid heavy, oily foods",
        ),
        medications=(MedicationDose("Paracetamol", "500-1000mg", "Every 6-8 hours", "Until fever subsides"),),
        hydration="Drink plenty of water, oral rehydration solution if needed. Monitor fluid intake.",
        rest="Complete rest. Stay in bed if temperature is high.",
        activities=(
            "Avoid physical activity",
            "Keep cool with light clothing",
            "Use cold compress on forehead",
            "Monitor temperature regularly",
        ),
        prevention=(
            "Identify and treat underlying cause",
            "Maintain good hygiene",
            "Stay hydrated",
            "Get adequate rest",
        ),
        follow_up="If fever persists beyond 3 days or exceeds 103°F, seek medical attention immediately.",
    ),
    TreatmentPlan(
        condition="Body Pain",
        duration="2-7 days",
        diet=(
            "Anti-inflammatory foods (ginger, turmeric)",
            "Magnesium-rich foods (nuts, seeds)",
            "Stay hydrated",
            "Avoid processed foods",
        ),
        medications=(MedicationDose("Ibuprofen", "200-400mg", "Every 6-8 hours", "3-5 days (with food)"),),
        hydration="Drink adequate water. Dehydration can worsen muscle pain.",
        rest="Rest the affected area. Avoid overexertion.",
        activities=(
            "Gentle stretching",
            "Warm compress on painful areas",
            "Light massage if helpful",
            "Avoid heavy lifting",
        ),
        prevention=("Regular exercise", "Proper posture", "Adequate sleep", "Stress management"),
        follow_up="If pain is severe, persistent, or accompanied by other symptoms, consult a doctor.",
    ),
    TreatmentPlan(
        condition="Stomach Infection",
        duration="3-7 days",
        diet=(
            "BRAT diet (Banana, Rice, Applesauce, Toast)",
            "Clear broths",
            "Avoid dairy, spicy, and fatty foods",
            "Small, frequent meals",
            "Probiotic foods (yogurt after recovery)",
        ),
        medications=(
            MedicationDose("Oral Rehydration Solution", "As directed", "After each loose stool", "Until diarrhea stops"),
        ),
        hydration="Critical: Drink ORS or electrolyte solutions. Sip water frequently.",
        rest="Rest is important. Avoid physical exertion.",
        activities=(
            "Stay home to prevent spread",
            "Maintain hygiene",
            "Avoid sharing utensils",
            "Wash hands frequently",
        ),
        prevention=(
            "Wash hands before eating",
            "Cook food thoroughly",
            "Avoid contaminated water",
            "Practice food safety",
        ),
        follow_up="If symptoms persist, dehydration occurs, or blood in stool, seek immediate medical care.",
    ),
    TreatmentPlan(
        condition="Headache",
        duration="1-3 days",
        diet=(
            "Regular meals to avoid low blood sugar",
            "Limit caffeine and alcohol",
            "Magnesium-rich foods (leafy greens, nuts)",
        ),
        medications=(MedicationDose("Paracetamol", "500mg", "Every 6-8 hours", "1-2 days (as needed)"),),
        hydration="Drink water steadily through the day. Dehydration is a common trigger.",
        rest="Rest in a quiet, dark room. Keep a regular sleep schedule.",
        activities=(
            "Take breaks from screens",
            "Gentle neck and shoulder stretches",
            "Apply a cool compress to the forehead",
        ),
        prevention=(
            "Identify and avoid triggers",
            "Maintain good posture",
            "Manage stress",
            "Keep regular sleep hours",
        ),
        follow_up="If headache is sudden and severe, follows an injury, or comes with vision changes, seek care immediately.",
    ),
    TreatmentPlan(
        condition="Cough",
        duration="1-3 weeks",
        diet=(
            "Warm water with honey and lemon",
            "Warm soups",
            "Avoid cold drinks and fried foods",
        ),
        medications=(MedicationDose("Honey-based cough syrup", "10ml", "Every 8 hours", "5-7 days (as needed)"),),
        hydration="Drink warm fluids often to soothe the throat and loosen mucus.",
        rest="Sleep with your head slightly raised to ease night-time coughing.",
        activities=(
            "Steam inhalation twice daily",
            "Avoid smoke and dust",
            "Use a humidifier if the air is dry",
        ),
        prevention=(
            "Avoid smoking",
            "Wash hands frequently",
            "Cover mouth when coughing",
        ),
        follow_up="If cough lasts more than 3 weeks, produces blood, or causes breathlessness, consult a doctor.",
    ),
    TreatmentPlan(
        condition="Sore Throat",
        duration="3-7 days",
        diet=(
            "Soft, soothing foods",
            "Warm tea with honey",
            "Avoid spicy and acidic foods",
        ),
        medications=(MedicationDose("Throat lozenges", "1 lozenge", "Every 3-4 hours", "3-5 days (as needed)"),),
        hydration="Sip warm fluids throughout the day.",
        rest="Rest your voice and get adequate sleep.",
        activities=(
            "Gargle with warm salt water 3-4 times daily",
            "Avoid shouting or prolonged talking",
            "Avoid smoke exposure",
        ),
        prevention=(
            "Wash hands frequently",
            "Do not share utensils or drinks",
            "Avoid close contact with sick people",
        ),
        follow_up="If swallowing becomes difficult, fever is high, or symptoms last beyond a week, consult a doctor.",
    ),
    TreatmentPlan(
        condition="Diarrhea",
        duration="2-5 days",
        diet=(
            "BRAT diet (Banana, Rice, Applesauce, Toast)",
            "Avoid dairy, caffeine and greasy foods",
            "Small, frequent meals",
        ),
        medications=(
            MedicationDose("Oral Rehydration Solution", "As directed", "After each loose stool", "Until diarrhea stops"),
        ),
        hydration="Critical: Replace lost fluids with ORS. Sip small amounts often.",
        rest="Rest at home until stools normalize.",
        activities=(
            "Stay near a bathroom",
            "Wash hands after each bathroom visit",
            "Avoid preparing food for others",
        ),
        prevention=(
            "Drink safe, clean water",
            "Wash fruits and vegetables",
            "Practice food safety",
        ),
        follow_up="If diarrhea lasts over 2 days, contains blood, or signs of dehydration appear, seek medical care.",
    ),
    TreatmentPlan(
        condition="Constipation",
        duration="3-7 days",
        diet=(
            "High-fiber foods (whole grains, fruits, vegetables)",
            "Prunes or prune juice",
            "Limit processed foods and red meat",
        ),
        medications=(MedicationDose("Psyllium husk", "1 teaspoon in water", "Once daily", "Up to 7 days"),),
        hydration="Drink 8-10 glasses of water daily to soften stools.",
        rest="Keep a regular daily routine, including a consistent time for bathroom visits.",
        activities=(
            "Walk for 20-30 minutes daily",
            "Do not ignore the urge to go",
            "Light abdominal exercises",
        ),
        prevention=(
            "Eat fiber every day",
            "Stay active",
            "Stay well hydrated",
        ),
        follow_up="If constipation lasts over a week or comes with severe pain or bleeding, consult a doctor.",
    ),
    TreatmentPlan(
        condition="Acid Reflux",
        duration="1-2 weeks",
        diet=(
            "Small, frequent meals",
            "Avoid spicy, fatty and citrus foods",
            "Limit coffee, chocolate and carbonated drinks",
        ),
        medications=(MedicationDose("Antacid", "10-20ml", "After meals and at bedtime", "Up to 2 weeks (as needed)"),),
        hydration="Drink water between meals rather than with large meals.",
        rest="Raise the head of the bed and avoid lying down within 3 hours of eating.",
        activities=(
            "Take a short walk after meals",
            "Avoid tight clothing around the waist",
            "Avoid bending over after eating",
        ),
        prevention=(
            "Maintain a healthy weight",
            "Avoid smoking",
            "Eat dinner early",
        ),
        follow_up="If heartburn occurs more than twice a week or swallowing is painful, consult a doctor.",
    ),
)

FALLBACK_PLAN = TreatmentPlan(
    condition="",
    duration="5-7 days",
    diet=("Balanced diet", "Plenty of fluids", "Avoid processed foods"),
    medications=(
        MedicationDose("Consult doctor for prescription", "As prescribed", "As directed", "As per doctor's advice"),
    ),
    hydration="Drink 8-10 glasses of water daily",
    rest="Get adequate rest and sleep",
    activities=("Light activities only", "Avoid strenuous exercise"),
    prevention=("Maintain good hygiene", "Follow healthy lifestyle"),
    follow_up="Consult a healthcare provider for proper diagnosis and treatment.",
    is_fallback=True,
)


class TreatmentPlanner:
    """Case-insensitive lookup of home-care plans."""

    def __init__(self, plans: Tuple[TreatmentPlan, ...] = TREATMENT_PLANS):
        self._plans = {plan.condition.lower(): plan for plan in plans}
        self._conditions = [plan.condition for plan in plans]

    @property
    def conditions(self) -> List[str]:
        """Known condition names in display order."""
        return list(self._conditions)

    def plan_for(self, condition: str) -> TreatmentPlan:
        """
        Plan for a condition, or the generic plan carrying the requested name.

        Raises:
            AssessmentValidationError: if the condition name is empty
        """
        name = require_text(condition, "condition", "Please select a condition")
        plan = self._plans.get(name.lower())
        if plan is None:
            logger.debug(f"No plan for '{name}', using fallback")
            return replace(FALLBACK_PLAN, condition=name)
        return plan
