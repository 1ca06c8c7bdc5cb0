"""Prompt templates for the document generators and the chat assistant."""

from .models import DonorMatchData, MonthlyReportData, ProposalData

CHAT_SYSTEM_INSTRUCTION = (
    "You are an expert consultant for Non-Profit Organisations in South Africa. "
    "You provide clear, actionable advice on topics like fundraising, governance, "
    "marketing, and operations. Your tone is professional, encouraging, and helpful. "
    "Format your responses with Markdown for readability."
)

CHAT_GREETING = "Hello! I am your NPO Assistant. How can I help you today with your non-profit?"

CHAT_INIT_ERROR = (
    "Sorry, the chat assistant could not be initialized. Please check your API Key "
    "and network connection, then try closing and reopening this tool."
)

CHAT_STREAM_ERROR = (
    "Sorry, an error occurred. This could be a network issue or a problem with the "
    "AI service. Please check your connection and try again. If the problem persists, "
    "the service may be temporarily unavailable."
)


def build_proposal_prompt(data: ProposalData) -> str:
    return f"""Act as an expert non-profit grant writer and business consultant in South Africa.
Based on the following information, generate a comprehensive and persuasive business proposal suitable for funding applications.

**NPO Name:** {data.npo_name}
**NPO Mission Statement:** {data.npo_mission}
**Project Title:** {data.project_title}
**Executive Summary:** {data.project_summary}
**1. Introduction & Problem Statement:** Expand on: {data.problem_statement}
**2. Proposed Solution & Project Description:** Based on solution: {data.solution} and activities: {data.activities}
**3. Target Audience / Beneficiaries:** Detail for: {data.target_audience}
**4. Budget Overview:** Summarize for: {data.budget}
**5. Expected Outcomes & Impact Measurement:** Based on: {data.outcomes}
**6. Organizational Background:** Use NPO Name and Mission.
**7. Conclusion:** Write a strong, persuasive call to action.

**Instructions:**
- Structure as a formal document with clear Markdown headings (e.g., "## 1. Introduction").
- Use professional, formal, and compelling language.
- Ensure the output is well-formatted and readable."""


def build_monthly_report_prompt(data: MonthlyReportData) -> str:
    return f"""Act as an NPO management consultant. Generate a professional monthly report for "{data.npo_name}" for the period of "{data.reporting_period}".

Structure the report with the following sections using Markdown:
1. **Executive Summary:** A brief overview of the month's performance.
2. **Key Achievements & Highlights:** Based on: {data.highlights}
3. **Challenges Encountered:** Based on: {data.challenges}
4. **Impact Metrics:** Include:
    - Beneficiaries Reached: {data.beneficiaries_reached}
    - Funds Raised: {data.funds_raised}
5. **Goals for Next Month:** Based on: {data.goals_next_month}
6. **Conclusion:** A brief closing statement.

Use clear, concise, and professional language."""


def build_donor_match_prompt(data: DonorMatchData) -> str:
    return f"""I am a Non-Profit Organisation in {data.region}, South Africa.
Our mission is: "{data.npo_mission}".
We are currently seeking funding for: "{data.funding_needs}".

Based on this information, please identify 5 potential corporate donors, foundations, or grant-making institutions in South Africa that have a history of supporting similar causes.

For each potential donor, provide a brief summary of why they are a good match."""
