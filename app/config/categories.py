"""
Solution category catalogue.
Creators tag their profiles with these titles (solutions_for) and the
dashboard lists them as the entry points for browsing creators.
"""

CATEGORIES = [
    {
        "title": "Customer Communication",
        "description": "Chatbots, voice agents, request classification and routing",
    },
    {
        "title": "Back Office Automation",
        "description": "Invoice processing, form handling, data extraction",
    },
    {
        "title": "Sales & Lead Generation",
        "description": "Lead qualification, outreach automation, CRM tools",
    },
    {
        "title": "Knowledge Management",
        "description": "Document search, content summaries, Q&A systems",
    },
    {
        "title": "E-commerce Solutions",
        "description": "Product recommendations, cart assistants, SEO tools",
    },
    {
        "title": "Content & Social Media",
        "description": "Video automation, voiceovers, auto-posting",
    },
    {
        "title": "Scheduling & Reception",
        "description": "Appointment booking, virtual receptionists, calendars",
    },
    {
        "title": "Custom Solutions & Other Projects",
        "description": "Tailored automation for unique business needs, custom integrations",
    },
]

CATEGORY_TITLES = [c["title"] for c in CATEGORIES]


def is_known_category(title: str) -> bool:
    return title in CATEGORY_TITLES
