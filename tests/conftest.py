"""Shared fixtures: a manual clock scheduler, fake Gemini client, sample records."""

from types import SimpleNamespace

import pytest

from npoconnect.models import BankingDetails, Organization


class _ManualTimer:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when ``advance`` is called."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay, callback):
        timer = _ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self.active if t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.now = timer.when
            timer.fired = True
            timer.callback()
        self.now = target


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


class FakeChat:
    def __init__(self, chunks=(), error=None, fail_on_open=False):
        self.chunks = list(chunks)
        self.error = error
        self.fail_on_open = fail_on_open
        self.messages = []

    def send_message_stream(self, message):
        self.messages.append(message)
        if self.error and self.fail_on_open:
            raise self.error
        return self._stream()

    def _stream(self):
        for text in self.chunks:
            yield SimpleNamespace(text=text)
        if self.error:
            raise self.error


class FakeChats:
    def __init__(self, chat=None, error=None):
        self.chat = chat or FakeChat()
        self.error = error
        self.created = []

    def create(self, model, config=None):
        self.created.append({"model": model, "config": config})
        if self.error:
            raise self.error
        return self.chat


class FakeClient:
    """Stands in for ``google.genai.Client``."""

    def __init__(self, response=None, error=None, chat=None, chat_error=None):
        self.models = FakeModels(response=response, error=error)
        self.chats = FakeChats(chat=chat, error=chat_error)


def text_response(text, grounding_chunks=None):
    metadata = None
    if grounding_chunks is not None:
        metadata = SimpleNamespace(grounding_chunks=grounding_chunks)
    candidate = SimpleNamespace(grounding_metadata=metadata)
    return SimpleNamespace(text=text, candidates=[candidate])


def make_org(org_id, name, city="Johannesburg", sector="Education",
             date_registered="2015-01-01", banking=False):
    return Organization(
        id=org_id,
        name=name,
        sector=sector,
        primary_objective="Objective",
        address="1 Main Road",
        city=city,
        province="Gauteng",
        contact_number="011 000 0000",
        date_registered=date_registered,
        banking_details=BankingDetails(
            bank_name="FNB",
            account_holder=name,
            account_number="123",
            branch_code="250655",
            account_type="Cheque",
        ) if banking else None,
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def records():
    return (
        make_org(1, "Sunshine Youth Center", city="Soweto", sector="Youth Development",
                 date_registered="2012-03-14", banking=True),
        make_org(2, "Green Future Trust", city="Johannesburg", sector="Environment",
                 date_registered="2016-07-01", banking=True),
        make_org(3, "Hope for Tembisa", city="Tembisa", sector="Health",
                 date_registered="2009-11-20"),
        make_org(4, "Pretoria Literacy Project", city="Pretoria", sector="Education",
                 date_registered="2016-02-09"),
        make_org(5, "Ubuntu Elderly Care", city="Johannesburg", sector="Social Welfare",
                 date_registered="2018-05-30"),
        make_org(6, "Ekurhuleni Women in Business", city="Germiston",
                 sector="Economic Development", date_registered="2020-09-15"),
        make_org(7, "Soweto Green Spaces", city="Soweto", sector="Environment",
                 date_registered="2018-01-22"),
        make_org(8, "Little Steps Early Learning", city="Johannesburg", sector="Education",
                 date_registered="2012-08-08"),
        make_org(9, "Centurion Animal Rescue", city="Centurion", sector="Animal Welfare",
                 date_registered="2014-04-04"),
        make_org(10, "Tshwane Disability Forum", city="Pretoria", sector="Health",
                 date_registered="2020-12-01"),
    )
