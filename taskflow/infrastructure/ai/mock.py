"""Canned AI responses for offline use and tests."""

import re

from taskflow.domain.shared.result import Err, Ok, Result


class MockCompletionClient:
    """Completion client that answers every prompt with fixed text.

    Prompts are recorded in ``calls`` so callers can inspect them.
    Passing ``error`` makes every call fail with that message.
    """

    model = "mock"

    def __init__(self, response: str = "Mock AI response", error: str | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def is_available(self) -> bool:
        return self.error is None

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> Result[str, str]:
        self.calls.append(
            {
                "system": system,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            return Err(self.error)
        return Ok(self.response)


# =============================================================================
# Chat Replies
# =============================================================================

_PRIORITIZE_REPLY = """Based on your current workload, I recommend prioritizing:

1. **High-priority tasks with upcoming deadlines** - Focus on tasks due within the next 3 days
2. **Blocked tasks** - Resolve any dependencies that are preventing team progress
3. **Quick wins** - Complete 1-2 small tasks to build momentum
4. **Strategic work** - Allocate time for important but not urgent project planning

{context_note}"""

_PROGRESS_REPLY = """Here's my analysis of your project progress:

**Overall Health**: Your projects are showing good momentum!

**Key Insights**:
- Task completion rate is steady
- Most projects are on track with their timelines
- Team collaboration appears active

**Recommendations**:
- Review any overdue tasks and reassign if needed
- Consider breaking down large tasks into smaller, manageable pieces
- Schedule regular check-ins with team members

{context_note}"""

_RISK_REPLY = """**Risk Assessment for Your Projects**:

**Medium Risks Identified**:
- Some tasks approaching their due dates
- Potential resource allocation challenges
- Dependencies between tasks that could cause delays

**Low Risk Areas**:
- Team communication appears strong
- Project scope seems well-defined
- Regular progress updates are happening

**Mitigation Strategies**:
1. Set up automated deadline reminders
2. Create buffer time for complex tasks
3. Establish clear escalation paths for blocked work
4. Regular risk review meetings

Would you like me to dive deeper into any specific risk area?"""

_TIPS_REPLY = """**Productivity Tips for Project Management**:

**Time Management**:
- Use time-blocking for focused work sessions
- Batch similar tasks together
- Set clear start/end times for meetings

**Team Collaboration**:
- Create shared project documentation
- Establish regular update rhythms
- Use async communication when possible

**Task Organization**:
- Break large projects into 2-hour chunks
- Use priority matrices (urgent vs important)
- Celebrate small wins to maintain momentum

What specific area would you like me to elaborate on?"""

_GREETING_REPLY = """Hello! I'm your TaskFlow AI assistant. I'm here to help you:

- **Analyze your project progress** and identify bottlenecks
- **Prioritize tasks** based on deadlines and importance
- **Suggest improvements** for team productivity
- **Answer questions** about project management best practices

Try asking me:
- "What should I prioritize today?"
- "Analyze my project progress"
- "What are the risks in my projects?"
- "Give me productivity tips"

How can I help you today?"""

_DEFAULT_REPLY = """I understand you're asking about: "{message}"

As your AI project management assistant, I can help you with:

**Project Analysis**: I can review your project health, completion rates, and team performance
**Task Prioritization**: I'll help you focus on what matters most
**Risk Assessment**: I can identify potential issues before they become problems
**Productivity Tips**: I'll share best practices for efficient project management

{context_note}"""


def mock_chat_reply(message: str, has_context: bool) -> str:
    """Pick a canned reply by keyword. First matching group wins."""
    lower = message.lower()

    if "prioritize" in lower or "priority" in lower:
        note = (
            "Looking at your current projects, consider finishing in-progress tasks "
            "before starting new ones."
            if has_context
            else "Connect a project context to get more specific recommendations!"
        )
        return _PRIORITIZE_REPLY.format(context_note=note).strip()

    if "progress" in lower or "analyze" in lower:
        note = (
            "Based on your project data, I can see active development across your projects."
            if has_context
            else "For detailed project analysis, select a specific project as context."
        )
        return _PROGRESS_REPLY.format(context_note=note).strip()

    if "risk" in lower or "problem" in lower:
        return _RISK_REPLY

    if "tip" in lower or "advice" in lower or "help" in lower:
        return _TIPS_REPLY

    if "hello" in lower or "hi" in lower:
        return _GREETING_REPLY

    note = (
        "I can see you have project context loaded, so feel free to ask about your current work!"
        if has_context
        else ""
    )
    return _DEFAULT_REPLY.format(message=message, context_note=note).strip()


# =============================================================================
# Task Templates
# =============================================================================


def _template(title: str, description: str, priority: str, hours: int, tags: list[str]) -> dict:
    return {
        "title": title,
        "description": description,
        "priority": priority,
        "estimatedHours": hours,
        "tags": tags,
    }


TASK_TEMPLATES: dict[str, list[dict]] = {
    "website": [
        _template("Create wireframes and user flow", "Design the basic structure and navigation flow for the website", "HIGH", 8, ["design", "planning", "ux"]),
        _template("Set up development environment", "Configure local development setup with necessary tools and frameworks", "HIGH", 4, ["setup", "development", "environment"]),
        _template("Design homepage layout", "Create the main landing page design with responsive layout", "MEDIUM", 12, ["design", "frontend", "responsive"]),
        _template("Implement user authentication", "Build login/signup functionality with security features", "HIGH", 16, ["backend", "security", "auth"]),
        _template("Create content management system", "Build admin interface for managing website content", "MEDIUM", 20, ["backend", "cms", "admin"]),
        _template("Optimize for SEO", "Implement meta tags, structured data, and performance optimizations", "MEDIUM", 6, ["seo", "optimization", "marketing"]),
        _template("Test across devices and browsers", "Comprehensive testing on different devices and browsers", "HIGH", 8, ["testing", "qa", "compatibility"]),
    ],
    "mobile-app": [
        _template("Define app architecture", "Plan the technical architecture and technology stack", "HIGH", 6, ["architecture", "planning", "technical"]),
        _template("Create user interface mockups", "Design app screens and user interface elements", "HIGH", 16, ["design", "ui", "mockups"]),
        _template("Set up development framework", "Initialize project with chosen mobile development framework", "HIGH", 4, ["setup", "framework", "mobile"]),
        _template("Implement core navigation", "Build the main navigation and screen transitions", "MEDIUM", 12, ["navigation", "frontend", "mobile"]),
        _template("Integrate API services", "Connect app to backend services and APIs", "HIGH", 20, ["backend", "api", "integration"]),
        _template("Implement push notifications", "Set up push notification system for user engagement", "MEDIUM", 8, ["notifications", "engagement", "mobile"]),
        _template("Test on real devices", "Test app functionality on various mobile devices", "HIGH", 12, ["testing", "mobile", "qa"]),
    ],
    "marketing": [
        _template("Define target audience and personas", "Research and create detailed buyer personas for the campaign", "HIGH", 8, ["research", "personas", "strategy"]),
        _template("Develop campaign messaging", "Create compelling messaging and value propositions", "HIGH", 6, ["messaging", "copywriting", "strategy"]),
        _template("Design marketing materials", "Create visual assets for various marketing channels", "MEDIUM", 16, ["design", "assets", "creative"]),
        _template("Set up analytics tracking", "Implement tracking for campaign performance measurement", "HIGH", 4, ["analytics", "tracking", "measurement"]),
        _template("Launch social media campaign", "Execute social media strategy across chosen platforms", "MEDIUM", 12, ["social-media", "execution", "engagement"]),
        _template("Create email marketing sequence", "Develop automated email sequences for lead nurturing", "MEDIUM", 10, ["email", "automation", "nurturing"]),
        _template("Analyze and optimize performance", "Review campaign metrics and optimize based on data", "MEDIUM", 6, ["analysis", "optimization", "reporting"]),
    ],
}

GENERIC_TASKS: list[dict] = [
    _template("Project planning and scope definition", "Define project requirements, timeline, and deliverables", "HIGH", 6, ["planning", "scope", "requirements"]),
    _template("Research and competitive analysis", "Analyze competitors and market research for the project", "MEDIUM", 8, ["research", "analysis", "competitive"]),
    _template("Create project documentation", "Document project specifications and requirements", "MEDIUM", 4, ["documentation", "specs", "planning"]),
    _template("Set up project infrastructure", "Establish necessary tools and workflows for the project", "HIGH", 6, ["setup", "infrastructure", "tools"]),
    _template("Develop core functionality", "Build the main features and functionality", "HIGH", 24, ["development", "core", "features"]),
    _template("Quality assurance and testing", "Test all functionality and ensure quality standards", "HIGH", 12, ["testing", "qa", "quality"]),
]

MOCK_TASK_LIMIT = 6
_NAME_PATTERN = re.compile(r"website|app|campaign", re.IGNORECASE)


def mock_tasks(project_name: str, project_type: str | None = None) -> list[dict]:
    """Template tasks for a project type, titled after the project.

    Unknown or missing types get the generic list.
    """
    templates = TASK_TEMPLATES.get((project_type or "").lower(), GENERIC_TASKS)
    name = project_name.lower()
    return [
        {**task, "title": _NAME_PATTERN.sub(lambda _: name, task["title"]), "tags": list(task["tags"])}
        for task in templates[:MOCK_TASK_LIMIT]
    ]
