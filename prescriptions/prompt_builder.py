"""
Patient fields -> prompt text for the suggestion model
"""
from rx_assist.exceptions import ValidationError

from .types import PatientInfo

REQUIRED_PATIENT_FIELDS = ("name", "age", "gender", "symptoms")

PROMPT_TEMPLATE = """Patient Information:
Name: {name}
Age: {age}
Gender: {gender}
Symptoms: {symptoms}
Past Medical History/Long-term Problems: {past_history}

Based on this information, provide potential medical findings, suitable medications, and required lab tests.
**It is CRITICAL to adhere to the following specific output format and detail level for each section:**

Findings:
- [Concise Finding 1 (e.g., "Common Cold", "Possible Pneumonia", "Migraine")]
- [Concise Finding 2]
- [Concise Finding 3]
(For Findings, provide ONLY short, specific names, WITHOUT any explanations or descriptions.)

Medications:
- **[Medication Name]**: [REQUIRED EXPLANATION: Briefly describe its primary use, mechanism of action, or specific relevance to the patient's condition and symptoms. For instance, "This medication is commonly used to relieve pain and reduce fever."]
- **[Medication Name]**: [REQUIRED EXPLANATION: Briefly describe its primary use or relevance.]
(Each medication MUST be bolded and FOLLOWED by a concise, relevant explanation.)

Lab Tests:
- **[Lab Test Name]**: [REQUIRED EXPLANATION: Briefly describe what the test measures, its purpose, and its specific relevance to diagnosing or monitoring the patient's condition. For instance, "This test measures white blood cell count to detect infection or inflammation."]
- **[Lab Test Name]**: [REQUIRED EXPLANATION: Briefly describe what the test measures and its relevance.]
(Each lab test MUST be bolded and FOLLOWED by a concise, relevant explanation.)

Ensure all explanations are clear and directly relate to the patient's case."""


def build_prompt(patient: PatientInfo) -> str:
    """
    Fill the fixed template. Only presence of the required fields is checked;
    an empty past history becomes the literal "None".
    """
    errors = []
    for field_name in REQUIRED_PATIENT_FIELDS:
        value = getattr(patient, field_name)
        if value is None or not str(value).strip():
            errors.append({"field": field_name, "message": f"{field_name} is required"})
    if errors:
        raise ValidationError(
            message="Patient information is incomplete",
            code="VALIDATION_ERROR",
            detail={"errors": errors},
        )

    past_history = (patient.past_history or "").strip()
    return PROMPT_TEMPLATE.format(
        name=str(patient.name).strip(),
        age=str(patient.age).strip(),
        gender=str(patient.gender).strip(),
        symptoms=str(patient.symptoms).strip(),
        past_history=past_history or "None",
    )
