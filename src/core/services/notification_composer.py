"""Builds the confirmation emails sent when a trip is created or confirmed."""

from datetime import date, datetime
from html import escape

from core.models.notification import SUPPORTED_LOCALES, Notification, NotificationKind, Recipient
from core.models.trip import Trip

_MONTHS: dict[str, tuple[str, ...]] = {
    "pt-BR": (
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    "en-US": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

_LONG_DATE: dict[str, str] = {
    "pt-BR": "{day} de {month} de {year}",
    "en-US": "{month} {day}, {year}",
}

_TEXT: dict[str, dict[str, str]] = {
    "pt-BR": {
        "subject": "Confirme sua viagem para {destination}",
        "greeting": "Olá, {name}!",
        NotificationKind.TRIP_CREATED.value: "Você solicitou a criação de uma viagem para",
        NotificationKind.PARTICIPANT_INVITED.value: "Você foi convidado(a) para participar de uma viagem para",
        "dates": "nas datas de <strong>{start}</strong> até <strong>{end}</strong>.",
        "cta_" + NotificationKind.TRIP_CREATED.value: "Para confirmar sua viagem, clique no link abaixo:",
        "cta_" + NotificationKind.PARTICIPANT_INVITED.value: "Para confirmar sua presença, clique no link abaixo:",
        "link": "Confirmar viagem",
        "footer": "Caso você não saiba do que se trata esse e-mail, apenas ignore.",
    },
    "en-US": {
        "subject": "Confirm your trip to {destination}",
        "greeting": "Hi {name},",
        NotificationKind.TRIP_CREATED.value: "You asked to create a trip to",
        NotificationKind.PARTICIPANT_INVITED.value: "You have been invited to join a trip to",
        "dates": "from <strong>{start}</strong> to <strong>{end}</strong>.",
        "cta_" + NotificationKind.TRIP_CREATED.value: "To confirm your trip, click the link below:",
        "cta_" + NotificationKind.PARTICIPANT_INVITED.value: "To confirm your attendance, click the link below:",
        "link": "Confirm trip",
        "footer": "If you don't know what this email is about, just ignore it.",
    },
}

_TEMPLATE = """<div style="font-family: sans-serif; font-size: 16px; line-height: 1.6">
{greeting}  <p>
    {intro} <strong>{destination}</strong>, {dates}
  </p>
  <p></p>
  <p>{cta}</p>
  <p></p>
  <p>
    <a href="{link}">{link_label}</a>
  </p>
  <p></p>
  <p>{footer}</p>
</div>"""


def capitalize_months(text: str, locale: str) -> str:
    """Capitalize every month name of ``locale`` that appears in ``text``."""
    for month in _MONTHS[locale]:
        text = text.replace(month, month[0].upper() + month[1:])
    return text


def format_long_date(value: date | datetime, locale: str) -> str:
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale: {locale}")
    formatted = _LONG_DATE[locale].format(
        day=value.day,
        month=_MONTHS[locale][value.month - 1],
        year=value.year,
    )
    return capitalize_months(formatted, locale)


def compose_trip_notification(
    trip: Trip,
    recipient: Recipient,
    confirmation_link: str,
    kind: NotificationKind,
    locale: str = "pt-BR",
) -> Notification:
    """Render the confirmation email for one recipient of ``trip``.

    Pure: the same trip snapshot, recipient, link, kind and locale always
    produce the same subject and body.
    """
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale: {locale}")
    text = _TEXT[locale]
    destination = escape(trip.destination)

    greeting = ""
    if recipient.name:
        greeting = f"  <p>{text['greeting'].format(name=escape(recipient.name))}</p>\n"

    html = _TEMPLATE.format(
        greeting=greeting,
        intro=text[kind.value],
        destination=destination,
        dates=text["dates"].format(
            start=format_long_date(trip.starts_at, locale),
            end=format_long_date(trip.ends_at, locale),
        ),
        cta=text["cta_" + kind.value],
        link=escape(confirmation_link, quote=True),
        link_label=text["link"],
        footer=text["footer"],
    )
    return Notification(subject=text["subject"].format(destination=trip.destination), html=html)
