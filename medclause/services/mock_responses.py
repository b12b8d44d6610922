"""
Canned adapter responses used when no LLM or video-search key is configured.
"""

from datetime import datetime, timedelta, timezone
from typing import List

from ..models import VideoResource

MEDICAL_IMAGE = (
    "The image shows early signs of macular degeneration, characterized by small yellow deposits "
    "under the retina called drusen. These are visible as small yellowish spots in the central part "
    "of the retina. The condition appears to be in its early (dry) stage. No signs of wet macular "
    "degeneration or retinal hemorrhages are present. The optic disc and blood vessels appear normal. "
    "Regular monitoring is recommended, along with lifestyle modifications such as smoking cessation "
    "and dietary changes (more green leafy vegetables and fish rich in omega-3 fatty acids). "
    "Follow-up with an ophthalmologist in 6 months is advised to monitor for progression."
)

HEALTH_REPORT = """Based on the uploaded blood test report, several key findings are noted:

1. Elevated cholesterol levels (Total: 240 mg/dL, LDL: 160 mg/dL) indicating hypercholesterolemia
2. Slightly elevated blood glucose (110 mg/dL) suggesting a pre-diabetic condition
3. Complete blood count values within reference ranges
4. Liver function tests within normal limits
5. Normal kidney function (creatinine: 0.9 mg/dL, BUN: 15 mg/dL)

Recommendations:
- Reduce saturated fat and increase fiber intake
- Regular exercise (150 minutes of moderate activity weekly)
- Blood glucose monitoring
- Follow-up lipid panel in 3 months"""

MEDICATION = (
    "{name} is commonly prescribed for treating hypertension and certain cardiovascular conditions. "
    "It works by relaxing blood vessels to improve blood flow. Common side effects include dizziness, "
    "headache, and mild fatigue. Precautions are necessary for patients with kidney disease, pregnancy, "
    "or certain allergies. Drug interactions may occur with NSAIDs, potassium supplements, and certain "
    "antidepressants. Take it consistently at the same time each day and avoid sudden discontinuation "
    "without medical advice."
)

PRESCRIPTION_IMAGE = """The prescription image shows three medications:
1. Lisinopril 10mg - one tablet daily for blood pressure
2. Metformin 500mg - one tablet twice daily with meals for diabetes management
3. Atorvastatin 20mg - one tablet at bedtime for cholesterol

All medications are prescribed for 30 days with 2 refills. Schedule a follow-up in 3 months for a \
medication review, and contact the physician if side effects such as persistent cough, dizziness or \
muscle pain occur."""

TREATMENT_PLAN = """Based on the patient information and symptoms described, the recommended treatment plan is:

1. Medication:
   - Amoxicillin 500mg, three times daily for 10 days for the bacterial infection
   - Acetaminophen 500mg every 6 hours as needed for pain and fever

2. Diagnostic Tests:
   - Complete Blood Count to assess infection severity
   - Chest X-ray to rule out pneumonia

3. Lifestyle Recommendations:
   - Rest for 48-72 hours
   - At least 2-3 liters of fluid daily

4. Follow-up:
   - Virtual check-in after 3 days
   - Seek care immediately for shortness of breath or a fever above 102°F"""

HEALTH_ANSWER = (
    "Thanks for your question about \"{question}\". Common causes range from minor, self-limiting "
    "issues to conditions that need a clinician's attention. Track when the symptoms occur, how long "
    "they last and anything that makes them better or worse. Rest, hydration and a balanced diet help "
    "in most cases. If symptoms are severe, persistent or worsening, please consult a healthcare "
    "provider. This information is educational and not a substitute for professional medical advice."
)

VIDEO_SUMMARY = (
    "This educational video on \"{title}\" gives a comprehensive overview of the condition and its "
    "management. It explains the underlying physiology with clear diagrams, then covers common symptoms, "
    "risk factors and diagnostic criteria. The second part compares evidence-based treatment options, "
    "weighing medication against lifestyle changes, and includes patient testimonials. It closes with "
    "practical advice for daily management and guidance on when to seek medical attention."
)


def videos_for(query: str, titles: List[str], channels: List[str]) -> List[VideoResource]:
    now = datetime.now(timezone.utc)
    return [
        VideoResource(
            id=f"mock-{index + 1}",
            title=title.format(query=query),
            description=f"An educational overview about {query}.",
            thumbnail=f"https://placehold.co/320x180/6D28D9/FFFFFF.png?text=Video+{index + 1}",
            published_at=now - timedelta(days=7 * index),
            channel_title=channel,
        )
        for index, (title, channel) in enumerate(zip(titles, channels))
    ]


def search_results(query: str) -> List[VideoResource]:
    return videos_for(
        query,
        ["Understanding {query}: A Medical Perspective",
         "Living with {query}: Patient Stories",
         "Latest Treatments for {query}"],
        ["MedEd Channel", "Health & Wellness", "Medical Innovations"],
    )


def recommended_results(keyword: str) -> List[VideoResource]:
    return videos_for(
        keyword,
        ["{query} - Understanding Your Health",
         "Doctor's Guide to {query}",
         "Latest Research on {query}"],
        ["Health Insights", "Medical Channel", "Science of Medicine"],
    )
