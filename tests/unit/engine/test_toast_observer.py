"""
Tests for ToastObserver.
"""

import pytest

from lightning_e2e.engine.toast_observer import (
    TOAST_CONTAINER,
    TOAST_READ_TIMEOUT_MS,
    ToastKind,
    ToastObserver,
    classify_toast,
)
from lightning_e2e.exceptions import ToastMismatchError, ToastTimeoutError


SUCCESS_CLASSES = "slds-notify slds-notify_toast slds-theme_success"


class TestClassifyToast:
    
    @pytest.mark.parametrize("classes,kind", [
        (SUCCESS_CLASSES, ToastKind.SUCCESS),
        ("forceToastMessage toastMessage", ToastKind.SUCCESS),
        ("slds-notify_toast slds-theme_error", ToastKind.OTHER),
        ("", ToastKind.OTHER),
        (None, ToastKind.OTHER),
    ])
    def test_classify(self, classes, kind):
        assert classify_toast(classes) is kind


class TestCaptureToast:
    """Capture and verification."""
    
    @pytest.mark.asyncio
    async def test_case_insensitive_match(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="Lead has been CREATED.", classes=SUCCESS_CLASSES)
        
        message = await ToastObserver(fake_page, timeout_ms=50).capture_toast("created")
        
        assert message.text == "Lead has been CREATED."
        assert message.kind is ToastKind.SUCCESS
    
    @pytest.mark.asyncio
    async def test_text_is_stripped(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="\n  Saved.  \n", classes=SUCCESS_CLASSES)
        
        message = await ToastObserver(fake_page).capture_toast("saved")
        
        assert message.text == "Saved."
    
    @pytest.mark.asyncio
    async def test_no_toast_times_out(self, fake_page):
        with pytest.raises(ToastTimeoutError) as exc_info:
            await ToastObserver(fake_page, timeout_ms=50).capture_toast("created")
        
        assert exc_info.value.expected_text == "created"
        assert exc_info.value.timeout_ms == 50
    
    @pytest.mark.asyncio
    async def test_wrong_text(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="Record was updated.", classes=SUCCESS_CLASSES)
        
        with pytest.raises(ToastMismatchError) as exc_info:
            await ToastObserver(fake_page).capture_toast("created")
        
        assert exc_info.value.actual_text == "Record was updated."
        assert exc_info.value.expected_text == "created"
    
    @pytest.mark.asyncio
    async def test_error_toast_is_not_success(self, fake_page):
        fake_page.add(
            TOAST_CONTAINER,
            text="Record was not created: duplicate detected",
            classes="slds-notify_toast slds-theme_error",
        )
        
        with pytest.raises(ToastMismatchError) as exc_info:
            await ToastObserver(fake_page).capture_toast("created")
        
        assert exc_info.value.expected_kind == "success"
        assert "slds-theme_error" in exc_info.value.actual_classes
    
    @pytest.mark.asyncio
    async def test_other_kind_accepts_any_toast(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="Review the errors on this page.", classes="slds-theme_error")
        
        message = await ToastObserver(fake_page).capture_toast("errors", expected_kind=ToastKind.OTHER)
        
        assert message.kind is ToastKind.OTHER
    
    @pytest.mark.asyncio
    async def test_mismatch_not_retried(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="Something else", classes=SUCCESS_CLASSES)
        
        with pytest.raises(ToastMismatchError):
            await ToastObserver(fake_page).capture_toast("created")
        
        assert fake_page.probes() == [TOAST_CONTAINER]
    
    @pytest.mark.asyncio
    async def test_toast_gone_before_read(self, fake_page):
        fake_page.add(
            TOAST_CONTAINER,
            classes=SUCCESS_CLASSES,
            read_error="Timeout 1000ms exceeded",
        )
        
        with pytest.raises(ToastTimeoutError) as exc_info:
            await ToastObserver(fake_page, timeout_ms=50).capture_toast("created")
        
        assert exc_info.value.expected_text == "created"
        assert exc_info.value.timeout_ms == 50
    
    @pytest.mark.asyncio
    async def test_read_is_single_short_call(self, fake_page):
        fake_page.add(TOAST_CONTAINER, text="Saved.", classes=SUCCESS_CLASSES)
        
        await ToastObserver(fake_page).capture_toast("saved")
        
        assert fake_page.events("read") == [("read", TOAST_CONTAINER, TOAST_READ_TIMEOUT_MS)]
