"""Class summary messages for the instructor, written by Gemini."""

import logging

from google import genai

from utils.csv_export import format_class_date

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = 'Please configure GEMINI_API_KEY to use the AI summary.'
EMPTY_RESPONSE_MESSAGE = 'No summary could be generated.'
FAILURE_MESSAGE = 'Something went wrong generating the summary. Check that the API key is valid.'

PROMPT_TEMPLATE = """
You are a thoughtful assistant to a yoga teacher.
Using the registration details below, write a short, warm Line message
to the teacher confirming the class.

Class: {class_name}
Date: {class_date}

Registered students:
{student_list}

Total students: {total}

Please include:
1. A summary of the sign-ups.
2. A reminder about any students who have not paid yet (if there are any).
3. One sentence of encouragement for the teacher.
Write the message in {language}. Do not use Markdown; output plain text only.
"""


def build_prompt(registrations, class_name, class_date, language='Traditional Chinese'):
    student_list = '\n'.join(
        f"- {r.student_name} ({'paid' if r.is_paid else 'unpaid'})"
        for r in registrations
    )
    return PROMPT_TEMPLATE.format(
        class_name=class_name,
        class_date=format_class_date(class_date[:10]),
        student_list=student_list,
        total=len(registrations),
        language=language,
    )


def generate_class_summary(registrations, class_name, class_date, api_key='',
                           model='gemini-2.5-flash', language='Traditional Chinese'):
    """Return a plain-text summary message. Never raises."""
    if not api_key:
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(registrations, class_name, class_date, language)
    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(model=model, contents=prompt)
    except Exception:
        logger.exception("Gemini API error")
        return FAILURE_MESSAGE

    return response.text or EMPTY_RESPONSE_MESSAGE
