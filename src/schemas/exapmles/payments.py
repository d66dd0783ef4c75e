from typing import Dict, Any

checkout_session_request_schema_example: Dict[str, Any] = {
    "userId": "6f1c2a4e-93b1-4d0c-8a51-1f0f3c2b7d11",
    "email": "founder@startup.io",
    "companyName": "Startup Labs",
    "type": "founder",
    "isGala": True,
    "ticketType": ""
}

checkout_session_response_schema_example: Dict[str, Any] = {
    "url": "https://checkout.stripe.com/c/pay/cs_test_a1b2c3d4e5f6"
}

webhook_response_schema_example: Dict[str, Any] = {
    "received": True
}

error_response_schema_example: Dict[str, Any] = {
    "error": "Missing data"
}
