GENERATE_PROMPT = (
    "You are an AI assistant helping a student write a scholarship application letter "
    "for the {{ scholarship }}.\n\n"
    "Generate a paragraph for the '{{ section }}' section of the letter based on the "
    "following student information:\n"
    "{{ context_lines }}\n"
    "Please generate a concise and relevant paragraph suitable for the '{{ section }}' "
    "section. Focus on being helpful and constructive."
    "{% if section_hint %} {{ section_hint }}{% endif %}"
)

IMPROVE_PROMPT = (
    "You are an AI assistant helping a student improve a section of their scholarship "
    "application letter for the {{ scholarship }}.\n\n"
    "The student has provided the following text for the '{{ section }}' section:\n"
    '"{{ existing_text }}"\n\n'
    "Please improve this text. Focus on clarity, conciseness, impact, and grammar, while "
    "maintaining the student's original voice and intent. Provide only the improved text "
    "as the output.\n\n"
    "Here is some additional context about the student (use this to inform the improvements):\n"
    "{{ context_lines }}\n"
    "Improved text for the '{{ section }}' section:"
)

FEEDBACK_PROMPT = (
    "You are an AI assistant providing constructive feedback on a section of a student's "
    "scholarship application letter for the {{ scholarship }}.\n\n"
    "The student has provided the following text for the '{{ section }}' section:\n"
    '"{{ existing_text }}"\n\n'
    "Please provide specific, actionable feedback on how the student can improve this "
    "section. Focus on clarity, impact, relevance to the scholarship, and overall "
    "effectiveness. Present the feedback as a bulleted list.\n\n"
    "Here is some additional context about the student (use this to inform the feedback):\n"
    "{{ context_lines }}\n"
    "Constructive feedback for the '{{ section }}' section (as a bulleted list):"
)

# Extra sentence appended to the generate prompt, keyed by exact section name.
SECTION_HINTS = {
    "Introduction": (
        "The introduction should briefly state the student's name, the scholarship they "
        "are applying for, and their primary field of study or career aspiration."
    ),
    "Academic Achievements": (
        "Highlight key academic successes, mentioning the GPA if relevant, and connect "
        "them to the student's suitability for the scholarship."
    ),
    "Career Goals": (
        "Describe the student's future aspirations and how this scholarship will help "
        "achieve them."
    ),
    "Extracurricular Activities": (
        "Mention significant activities or involvement and relate them to the student's "
        "character or goals."
    ),
    "Financial Need": (
        "Briefly explain the student's financial situation and why the scholarship support "
        "is needed, maintaining a respectful tone."
    ),
    "Conclusion": (
        "Summarize the student's interest, reiterate their suitability, and thank the "
        "foundation for their consideration. Keep it brief and professional."
    ),
}
