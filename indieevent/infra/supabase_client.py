from typing import Optional
from supabase import create_client, Client, ClientOptions
from indieevent.config import SUPABASE_URL, SUPABASE_KEY, PROVIDER_TIMEOUT_SECONDS

_supabase: Optional[Client] = None

def get_supabase() -> Client:
    """
    Client Supabase partagé (clé service role ou anon selon la configuration).
    - Le timeout PostgREST est aligné sur PROVIDER_TIMEOUT_SECONDS.
    """
    global _supabase
    if not (SUPABASE_URL and SUPABASE_KEY):
        raise RuntimeError("SUPABASE_URL/SUPABASE_KEY manquants pour get_supabase()")
    if _supabase is None:
        options = ClientOptions(postgrest_client_timeout=PROVIDER_TIMEOUT_SECONDS)
        _supabase = create_client(SUPABASE_URL, SUPABASE_KEY, options=options)
    return _supabase
