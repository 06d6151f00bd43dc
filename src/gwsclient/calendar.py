"""
Google Calendar adapter: pick a calendar by ID or shareable URL and list its
upcoming events.

    calendar = GoogleCalendar()
    calendar.set_calendar('https://calendar.google.com/calendar/embed?src=ryan%40processwire.com')
    for event in calendar.get_events(maxResults=5):
        print(event.summary, event.starts())
"""
from dataclasses import dataclass, field
from typing import Tuple
import datetime
import logging
import re
from zoneinfo import ZoneInfo

from .access import GoogleServiceClient
from .errors import ValidationError, describe_error
from .resources import GoogleWorkSpaceResourceBase

logger = logging.getLogger(__name__)

_CALENDAR_URL_RE = re.compile(r"[?&;/](cid=|src=|ical/)([-_.@a-zA-Z0-9]+)")

def parse_calendar_url(url: str) -> str:
    """
    Calendar ID from a shareable calendar URL, any of:
        https://calendar.google.com/calendar?cid=cxlhbkByYy1kLn4lcA
        https://calendar.google.com/calendar/embed?src=ryan%40processwire.com&ctz=America%2FNew_York
        https://calendar.google.com/calendar/ical/ryan%40processwire.com/public/basic.ics
    """
    m = _CALENDAR_URL_RE.search(str(url).replace('%40', '@'))
    if not m:
        raise ValidationError("Unrecognized calendar URL format. Please use a shareable calendar URL "
                              "that contains a calendar ID (cid) in the query string")
    return m.group(2)

def rfc3339(value: datetime.datetime|datetime.date|int|float|str) -> str:
    """
    timeMin/timeMax must carry a UTC offset.  Accepts datetimes, dates (midnight),
    epoch seconds as a number or digit string, or an ISO string.  Naive values are
    taken as local time.
    """
    v = value
    if isinstance(v, str):
        s = v.strip()
        v = int(s) if s.isdigit() else datetime.datetime.fromisoformat(s)
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        v = datetime.datetime.fromtimestamp(v, tz=datetime.timezone.utc)
    if not isinstance(v, datetime.datetime):
        if not isinstance(v, datetime.date):
            raise ValidationError(f"Unrecognized date/time value: {value!r}")
        v = datetime.datetime.combine(v, datetime.time.min)
    if v.tzinfo is None:
        v = v.astimezone()
    return v.replace(microsecond=0).isoformat()

@dataclass
class EventDateTime(GoogleWorkSpaceResourceBase):
    """
    Event start/stop.  All-day events use 'date', timed ones 'dateTime',
    never both; dateTime wins if both turn up.
    """
    date: datetime.date|str|None = field(default=None)
    dateTime: datetime.datetime|str|None = field(default=None)
    timeZone: ZoneInfo|str|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.date) or bool(self.dateTime)

    def __str__(self) -> str:
        s = str(self.dateTime) if self.dateTime else str(self.date) if self.date else "<empty>"
        if self.timeZone:
            s = f'{s}:{self.timeZone}'
        return s

    def fixup(self) -> None:
        if self.date is not None and not isinstance(self.date, datetime.date):
            self.date = datetime.date.fromisoformat(str(self.date))
        if self.dateTime is not None and not isinstance(self.dateTime, datetime.datetime):
            self.dateTime = datetime.datetime.fromisoformat(str(self.dateTime)).replace(microsecond=0)
        if self.timeZone is not None and not isinstance(self.timeZone, ZoneInfo):
            self.timeZone = ZoneInfo(str(self.timeZone))
        if self.dateTime and self.date:
            self.date = None

    def value(self) -> datetime.date|datetime.datetime|None:
        return self.dateTime if self.dateTime else self.date

    def to_base(self) -> dict|None:
        """GWS wants ISO strings with the 'T' separator, and only the fields in use"""
        self.fixup()
        base = {'date': self.date.isoformat() if self.date else None,
                'dateTime': self.dateTime.isoformat() if self.dateTime else None,
                'timeZone': str(self.timeZone) if self.timeZone else None}
        base = {k: v for k, v in base.items() if v is not None}
        return base or None

@dataclass
class Event(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/calendar/api/v3/reference/events#resource-representations
    The subset of fields needed to list and show events.
    """
    kind: str|None = field(default=None)
    id: str|None = field(default=None)
    status: str|None = field(default=None)
    htmlLink: str|None = field(default=None)
    summary: str|None = field(default=None)
    description: str|None = field(default=None)
    location: str|None = field(default=None)
    start: EventDateTime|dict|None = field(default=None)
    end: EventDateTime|dict|None = field(default=None)
    recurringEventId: str|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.start is not None and not isinstance(self.start, EventDateTime):
            self.start = EventDateTime.from_dict(self.start)
        if self.end is not None and not isinstance(self.end, EventDateTime):
            self.end = EventDateTime.from_dict(self.end)

    def __bool__(self) -> bool:
        return bool(self.id)

    def __str__(self) -> str:
        if not self:
            return "<empty>"
        ret = f"{self.summary}<{self.id}>"
        if self.start:
            ret += f"({self.starts()}-->{self.ends()})"
        return ret

    def starts(self) -> datetime.date|datetime.datetime|None:
        return self.start.value() if self.start else None

    def ends(self) -> datetime.date|datetime.datetime|None:
        return self.end.value() if self.end else None

    def duration(self) -> Tuple[datetime.date|datetime.datetime|None, datetime.date|datetime.datetime|None]:
        return (self.starts(), self.ends())

    def all_day(self) -> bool:
        """Just date components, no times"""
        return bool(self.start and self.start.date is not None and self.end and self.end.date is not None)

    def to_base(self) -> dict:
        b = {k: v for k, v in super().to_base().items() if k not in ('start', 'end')}
        b['start'] = self.start.to_base() if self.start else None
        b['end'] = self.end.to_base() if self.end else None
        return b

class GoogleCalendar(GoogleServiceClient):
    """
    Calendar v3 adapter.  Works against 'primary' (the authenticated user's
    calendar) until told otherwise.
    """
    service_name = "calendar"
    service_version = "v3"
    scopes = ("calendar-ro",)

    DEFAULT_EVENT_OPTIONS = {
        'maxResults': 10,
        'orderBy': 'startTime',
        'singleEvents': True,
        'timeMin': None,  # now, filled in per call
        'timeMax': None,
        'q': '',
    }

    def __init__(self, calendar: str = "primary", service=None) -> None:
        super().__init__(service)
        self._calendar_id = "primary"
        if calendar:
            self.set_calendar(calendar)

    def __str__(self) -> str:
        return self._calendar_id

    @property
    def calendar_id(self) -> str:
        return self._calendar_id

    def set_calendar(self, calendar: str) -> "GoogleCalendar":
        """Set the calendar by ID or shareable URL"""
        if '://' in str(calendar):
            return self.set_calendar_url(calendar)
        return self.set_calendar_id(calendar)

    def set_calendar_url(self, url: str) -> "GoogleCalendar":
        self._calendar_id = parse_calendar_url(url)
        return self

    def set_calendar_id(self, calendar_id: str) -> "GoogleCalendar":
        self._calendar_id = str(calendar_id)
        return self

    def event_options(self, **options) -> dict:
        """
        Merge options over DEFAULT_EVENT_OPTIONS into events.list() query
        parameters: times converted to RFC 3339, empty q/timeMax dropped.
        """
        merged = dict(self.DEFAULT_EVENT_OPTIONS)
        merged.update(options)
        if merged['timeMin'] is None:
            merged['timeMin'] = datetime.datetime.now(datetime.timezone.utc)
        for t in ('timeMin', 'timeMax'):
            if merged.get(t) is not None and merged[t] != '':
                merged[t] = rfc3339(merged[t])
        for k in ('q', 'timeMax'):
            if not merged.get(k):
                merged.pop(k, None)
        merged.pop('pageToken', None)
        return merged

    def get_events(self, calendar_id: str|None = None, **options) -> list[Event]:
        """
        https://developers.google.com/calendar/api/v3/reference/events/list
        Upcoming events, by default the next 10 from now in start order.
        Options are events.list() query parameters, see DEFAULT_EVENT_OPTIONS.
        """
        cid = calendar_id if calendar_id else self._calendar_id
        params = self.event_options(**options)
        limit = params.get('maxResults', 0)
        method = self.service().events().list
        events = []
        page_token = None
        while True:
            logger.debug("events.list %s page %s", cid, page_token)
            response = method(calendarId=cid, pageToken=page_token, **params).execute()
            events.extend(Event.from_dict(e) for e in response.get('items', []))
            page_token = response.get('nextPageToken', None)
            if not page_token or (limit and len(events) >= limit):
                break
        return events[:limit] if limit else events

    def test(self) -> str:
        """Upcoming events as display text, or why they could not be read"""
        out = []
        try:
            for event in self.get_events():
                out.append(f"{event.summary}\t{event.starts()}")
            if not out:
                out.append("No upcoming events found.")
        except Exception as e:
            logger.warning("calendar test failed: %s", describe_error(e))
            out = [f"Google Calendar test failed: {describe_error(e)}"]
        return "Google Calendar, upcoming events test:\n" + "\n".join(out)
