from services.engine import RiskLevel

URL_RECOMMENDATIONS = {
    RiskLevel.HIGH: (
        "Do not visit this URL",
        "Report this URL if received via email or message",
        "Delete the message that contained this link",
    ),
    RiskLevel.MEDIUM: (
        "Exercise caution - verify the sender if received via communication",
        "Do not enter passwords or personal information on this page",
        "Reach the organization through its official website instead of this link",
    ),
    RiskLevel.LOW: (
        "URL appears safe based on basic analysis",
        "Always verify legitimacy of sensitive requests",
    ),
}

EMAIL_RECOMMENDATIONS = {
    RiskLevel.HIGH: (
        "This email shows multiple phishing indicators - do not respond or click any links",
        "Report this email to your IT department or email provider",
        "Delete the email immediately",
    ),
    RiskLevel.MEDIUM: (
        "Exercise caution - verify sender through independent means",
        "Do not provide sensitive information via email",
        "Contact the organization directly using official contact methods",
    ),
    RiskLevel.LOW: (
        "Email appears relatively safe based on content analysis",
        "Still verify sender if requesting sensitive actions",
        "Be cautious of any unexpected requests",
    ),
}
