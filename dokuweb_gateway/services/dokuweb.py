"""
Doku@WEB API Client

Wraps the two transport styles of the Doku@WEB ticket API:
- REST (httpx): auth token, ticket details, ticket search (XML responses)
- SOAP (zeep, Tickets.cfc): createTicket, getKeywords

The auth token is fetched once and treated as valid for the lifetime of the
client; there is no expiry tracking and no retry.
"""
import asyncio
import json
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from zeep import AsyncClient
from zeep.transports import AsyncTransport

from dokuweb_gateway.config import Settings, get_settings
from dokuweb_gateway.exceptions import (
    AuthenticationError,
    ParseError,
    PreconditionError,
    RemoteOperationError,
    TransportError,
)
from dokuweb_gateway.models.ticket import CreatedTicket, TicketOptions
from dokuweb_gateway.utils.logger import get_logger
from dokuweb_gateway.utils.xml_attributes import extract_element, extract_elements

logger = get_logger(__name__)

SUCCESS_MARKER = "true"


def parse_create_ticket_return(value: str) -> CreatedTicket:
    """
    Parse a createTicketReturn string

    Args:
        value: `true|<ticketid>|<ticketnr>` on success, anything else on failure

    Returns:
        CreatedTicket with ticketid and ticketnr

    Raises:
        RemoteOperationError: If the status field is not the success marker
        ParseError: If the success string lacks the id fields
    """
    parts = (value or "").strip().split("|")
    if parts[0] != SUCCESS_MARKER:
        raise RemoteOperationError("createTicket", f"Ticket creation failed: {value}")
    if len(parts) < 3:
        raise ParseError(f"Unexpected createTicket return: {value}")
    return CreatedTicket(ticketid=parts[1], ticketnr=parts[2])


def parse_keywords_return(value: str) -> List[Dict[str, Any]]:
    """
    Parse a getKeywordsReturn JSON envelope

    Args:
        value: JSON string `{"SUCCESS": bool, "DATA": [...], "ERRORTEXT": str}`

    Returns:
        The DATA array, unchanged

    Raises:
        ParseError: On malformed JSON or a non-object payload
        RemoteOperationError: If SUCCESS is false
    """
    try:
        payload = json.loads(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"getKeywords returned malformed JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError("getKeywords returned a non-object JSON payload")

    if not payload.get("SUCCESS"):
        raise RemoteOperationError(
            "getKeywords", f"getKeywords failed: {payload.get('ERRORTEXT', '')}"
        )
    return payload.get("DATA") or []


def _soap_return(result: Any, field: str) -> str:
    # zeep unwraps single-part responses to the bare value
    if isinstance(result, str):
        return result
    if isinstance(result, dict):
        value = result.get(field)
    else:
        value = getattr(result, field, None)
    if value is None:
        raise ParseError(f"SOAP response has no {field}")
    return str(value)


class DokuwebClient:
    """
    Doku@WEB ticket API client

    One instance owns one auth token and one SOAP client; neither is shared
    across instances.
    """

    def __init__(
        self,
        base_url: str,
        soap_wsdl: str,
        username: str,
        password: str,
        timeout: float = 30.0
    ):
        self.base_url = base_url.rstrip("/")
        self.soap_wsdl = soap_wsdl
        self.username = username
        self.password = password
        self.timeout = timeout

        self.auth_token: Optional[str] = None
        self._soap_client: Optional[AsyncClient] = None
        self._soap_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DokuwebClient":
        """Build a client from application settings"""
        settings = settings or get_settings()
        return cls(
            base_url=settings.dokuweb_base_url,
            soap_wsdl=settings.dokuweb_soap_wsdl,
            username=settings.dokuweb_username,
            password=settings.dokuweb_password,
            timeout=settings.dokuweb_timeout,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    async def __aenter__(self) -> "DokuwebClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the SOAP transport if one was created"""
        if self._soap_client is not None:
            transport = self._soap_client.transport
            await transport.aclose()
            # AsyncTransport.aclose() leaves the WSDL client open
            transport.wsdl_client.close()
            self._soap_client = None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def authenticate(self) -> str:
        """
        Fetch an auth token with HTTP Basic credentials

        GET {base_url}/dokuweb/auth/token, plain-text token body.

        Returns:
            The auth token (also stored on the client)

        Raises:
            AuthenticationError: On non-2xx status, network failure or empty body
        """
        url = f"{self.base_url}/dokuweb/auth/token"
        logger.info(f"Requesting auth token for {self.username}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, auth=(self.username, self.password))
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Authentication failed: HTTP {e.response.status_code}")
            raise AuthenticationError(
                e.response.status_code, e.response.reason_phrase
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Authentication request failed: {e}")
            raise AuthenticationError(message=f"Authentication failed: {e}") from e

        token = response.text.strip()
        if not token:
            raise AuthenticationError(
                response.status_code, message="Authentication failed: empty token"
            )

        self.auth_token = token
        return token

    def _require_token(self) -> str:
        if not self.auth_token:
            raise PreconditionError("authToken is missing. Call authenticate() first.")
        return self.auth_token

    def _create_soap_client(self) -> AsyncClient:
        # Loads the WSDL synchronously
        transport = AsyncTransport(timeout=self.timeout, operation_timeout=self.timeout)
        return AsyncClient(self.soap_wsdl, transport=transport)

    async def _get_soap_client(self) -> AsyncClient:
        """
        Return the SOAP client, creating it on first use

        Concurrent first callers wait on the lock and share one client.

        Raises:
            PreconditionError: If authenticate() has not produced a token
        """
        self._require_token()
        if self._soap_client is None:
            async with self._soap_lock:
                if self._soap_client is None:
                    logger.info(f"Loading SOAP client from {self.soap_wsdl}")
                    self._soap_client = await asyncio.to_thread(self._create_soap_client)
        return self._soap_client

    async def _get(self, operation: str, path: str, params: Dict[str, Any]) -> str:
        """
        GET a REST endpoint and return the body text

        Raises:
            TransportError: On non-2xx status or network failure
        """
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"{operation} failed: HTTP {e.response.status_code}")
            raise TransportError(
                operation, e.response.status_code, e.response.reason_phrase
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{operation} request failed: {e}")
            raise TransportError(operation, message=f"{operation} REST error: {e}") from e

    # ------------------------------------------------------------------
    # SOAP operations
    # ------------------------------------------------------------------

    async def create_ticket(
        self,
        subject: str,
        partner_id: str,
        keyword: str,
        options: Optional[TicketOptions] = None
    ) -> CreatedTicket:
        """
        Create a new ticket (SOAP createTicket)

        Args:
            subject: Ticket subject (sSubject)
            partner_id: Partner ID (sPartner), e.g. '1000.4711.00123.01'
            keyword: Existing keyword (sKeyword)
            options: Optional fields; channel defaults to "POST", type to "1"

        Returns:
            CreatedTicket with ticketid and ticketnr

        Raises:
            PreconditionError: Before authenticate()
            RemoteOperationError: On any SOAP, transport or parse failure
        """
        client = await self._get_soap_client()
        options = options or TicketOptions()
        method_args = {
            "authToken": self.auth_token,
            "sSubject": subject,
            "sPartner": partner_id,
            "sKeyword": keyword,
            "sCategory": options.category or "",
            "sChannel": options.channel or "POST",
            "sDescription": options.description or "",
            "sType": options.type or "1",
            "sPLZ": "",
            "sTicketgroup": options.ticket_group or "",
            "sFieldvalues": options.field_values or "",
            "sPriority": options.priority or "",
            "sTicketsystem": options.ticket_system or "",
        }

        logger.info(f"Creating ticket for partner {partner_id} (keyword: {keyword})")
        try:
            result = await client.service.createTicket(**method_args)
            created = parse_create_ticket_return(_soap_return(result, "createTicketReturn"))
        except Exception as e:
            logger.error(f"createTicket failed: {e}")
            raise RemoteOperationError("createTicket", f"createTicket SOAP error: {e}") from e

        logger.info(f"Created ticket {created.ticketnr} (id {created.ticketid})")
        return created

    async def get_keywords(
        self,
        channel: str = "",
        ticket_system: str = ""
    ) -> List[Dict[str, Any]]:
        """
        Fetch available keywords (SOAP getKeywords)

        Args:
            channel: Input channel filter (e.g. 'EMAIL', 'PHONE'); blank for all
            ticket_system: Ticket system code filter

        Returns:
            Keyword objects (KEYWORD, CATEGORY, TICKETTYPE, TICKETGROUP,
            PROCESS, DESCRIPTION) as sent by the server

        Raises:
            PreconditionError: Before authenticate()
            RemoteOperationError: On malformed JSON, SUCCESS=false or SOAP failure
        """
        client = await self._get_soap_client()
        method_args = {
            "authToken": self.auth_token,
            "sChannel": channel,
            "sTicketsystem": ticket_system,
        }

        try:
            result = await client.service.getKeywords(**method_args)
            keywords = parse_keywords_return(_soap_return(result, "getKeywordsReturn"))
        except Exception as e:
            logger.error(f"getKeywords failed: {e}")
            raise RemoteOperationError("getKeywords", f"getKeywords SOAP error: {e}") from e

        logger.info(f"Fetched {len(keywords)} keywords")
        return keywords

    # ------------------------------------------------------------------
    # REST operations
    # ------------------------------------------------------------------

    async def get_ticket_details(self, ticket_id: str) -> Dict[str, str]:
        """
        Retrieve ticket details by ticket ID

        GET {base_url}/dokuweb/ticket/{ticketid}. The XML body holds one
        <ticket .../> element with attributes such as ticketid, priority,
        channel, state, subject, description, create_by, create_on, ticketnr,
        partnerid and keyword.

        Returns:
            Ticket attributes exactly as written in the response

        Raises:
            PreconditionError: Before authenticate()
            TransportError: On non-2xx status or network failure
            ElementNotFoundError: If the body has no <ticket> element
        """
        token = self._require_token()
        logger.info(f"Fetching ticket {ticket_id}")
        xml = await self._get(
            "getTicketDetails",
            f"dokuweb/ticket/{quote(str(ticket_id), safe='')}",
            params={"authtoken": token},
        )
        return extract_element(xml, "ticket")

    async def search_tickets_by_creator(
        self,
        creator_login: str,
        start: int = 1,
        max_results: int = 10
    ) -> List[Dict[str, str]]:
        """
        Search tickets where CREATE_BY equals the given login

        GET {base_url}/dokuweb/tickets/ with a single filter triple
        (f1=CREATE_BY, f1_op==, f1_val=login).

        Args:
            creator_login: Login to match against CREATE_BY
            start: Starting index (1-based)
            max_results: Maximum number of results (server caps at 5000)

        Returns:
            Ticket attribute mappings in document order; empty if none match

        Raises:
            PreconditionError: Before authenticate()
            TransportError: On non-2xx status or network failure
        """
        token = self._require_token()
        params = {
            "authtoken": token,
            "start": start,
            "max": max_results,
            "field_count": 1,
            "f1": "CREATE_BY",
            "f1_op": "=",
            "f1_val": creator_login,
        }

        logger.info(f"Searching tickets created by {creator_login} (start={start}, max={max_results})")
        xml = await self._get("searchTicketsByCreator", "dokuweb/tickets/", params=params)
        tickets = extract_elements(xml, "ticket")
        logger.info(f"Found {len(tickets)} tickets created by {creator_login}")
        return tickets
