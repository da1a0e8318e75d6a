from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions
from floortrack.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None
    _auth_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; needed for auth admin calls such as deleting accounts."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def get_auth_client(cls) -> Client:
        """
        Client reserved for Supabase Auth calls (sign up, sign in, sign out, token checks).
        Auth events rewrite a client's PostgREST Authorization header, so this
        client never serves table queries and keeps no session of its own.
        """
        if cls._auth_client is None:
            cls._auth_client = create_client(
                settings.supabase_url,
                settings.supabase_key,
                options=ClientOptions(persist_session=False, auto_refresh_token=False),
            )
        return cls._auth_client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_supabase_admin() -> Client:
    return SupabaseClient.get_service_client()


def get_supabase_auth() -> Client:
    return SupabaseClient.get_auth_client()
