import pytest

from app.config import Settings
from app.flow.context import AppContext
from app.flow.navigation import Screen
from app.infra.supabase.client import StoreHandle


async def test_context_lifecycle(settings, store, fake_supabase):
    async with AppContext(settings, store) as ctx:
        assert fake_supabase.auth.listeners
        transition = await ctx.splash().run()
        assert transition.target is Screen.ONBOARDING

    assert fake_supabase.auth.listeners == []
    assert not store.is_initialized


async def test_full_signup_flow(settings, store, fake_supabase):
    async with AppContext(settings, store) as ctx:
        await ctx.splash().run()
        ctx.onboarding().get_started()
        ctx.login().open_signup()

        signup = ctx.signup()
        signup.full_name = "Jade Walker"
        signup.email = "jade@example.com"
        signup.password = "secret1"
        signup.confirm_password = "secret1"
        assert await signup.submit()

        assert ctx.navigator.screen is Screen.MAIN
        await ctx.main().start()
        assert ctx.session.current_user_id() in fake_supabase.tables["users"]


async def test_uninitialized_store_refuses_access(settings):
    store = StoreHandle(settings)

    with pytest.raises(RuntimeError):
        store.client


async def test_initialize_requires_credentials():
    store = StoreHandle(Settings(supabase_url=None, supabase_key=None))

    with pytest.raises(ValueError):
        await store.initialize()
