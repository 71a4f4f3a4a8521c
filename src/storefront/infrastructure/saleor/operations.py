"""GraphQL documents for every named backend operation."""

CHECKOUT_PRICING_FRAGMENT = """
fragment CheckoutPricing on Checkout {
  id
  subtotalPrice {
    net { amount currency }
    gross { amount currency }
  }
  totalPrice {
    net { amount currency }
    gross { amount currency }
  }
}
"""

# --- Catalog ------------------------------------------------------------------

PRODUCT_VARIANT = """
query ProductVariant($variantId: ID!, $channel: String!) {
  productVariant(id: $variantId, channel: $channel) {
    id
    pricing {
      price {
        net { amount currency }
      }
    }
    product {
      name
      description
      media { url alt }
    }
  }
}
"""

# --- Checkout -----------------------------------------------------------------

CHECKOUT_CREATE = (
    """
mutation CheckoutCreate($channel: String!, $lines: [CheckoutLineInput!]!) {
  checkoutCreate(input: { channel: $channel, lines: $lines }) {
    checkout { ...CheckoutPricing }
    errors { field message code }
  }
}
"""
    + CHECKOUT_PRICING_FRAGMENT
)

CHECKOUT_SHIPPING_ADDRESS_UPDATE = (
    """
mutation CheckoutShippingAddressUpdate($checkoutId: ID!, $address: AddressInput!) {
  checkoutShippingAddressUpdate(id: $checkoutId, shippingAddress: $address) {
    checkout { ...CheckoutPricing }
    errors { field message code }
  }
}
"""
    + CHECKOUT_PRICING_FRAGMENT
)

CHECKOUT_SHIPPING_METHODS = """
query CheckoutShippingMethods($checkoutId: ID!) {
  checkout(id: $checkoutId) {
    shippingMethods {
      id
      name
      price { amount currency }
    }
  }
}
"""

CHECKOUT_DELIVERY_METHOD_UPDATE = (
    """
mutation CheckoutDeliveryMethodUpdate($checkoutId: ID!, $deliveryMethodId: ID!) {
  checkoutDeliveryMethodUpdate(id: $checkoutId, deliveryMethodId: $deliveryMethodId) {
    checkout { ...CheckoutPricing }
    errors { field message code }
  }
}
"""
    + CHECKOUT_PRICING_FRAGMENT
)

CHECKOUT_EMAIL_UPDATE = """
mutation CheckoutEmailUpdate($checkoutId: ID!, $email: String!) {
  checkoutEmailUpdate(id: $checkoutId, email: $email) {
    errors { field message code }
  }
}
"""

CHECKOUT_BILLING_ADDRESS_UPDATE = """
mutation CheckoutBillingAddressUpdate($checkoutId: ID!, $billingAddress: AddressInput!) {
  checkoutBillingAddressUpdate(id: $checkoutId, billingAddress: $billingAddress) {
    errors { field message code }
  }
}
"""

PAYMENT_GATEWAY_INITIALIZE = """
mutation PaymentGatewayInitialize(
  $checkoutId: ID!
  $amount: PositiveDecimal
  $paymentGateways: [PaymentGatewayToInitialize!]
) {
  paymentGatewayInitialize(
    id: $checkoutId
    amount: $amount
    paymentGateways: $paymentGateways
  ) {
    gatewayConfigs {
      id
      data
      errors { field message code }
    }
    errors { field message code }
  }
}
"""

TRANSACTION_INITIALIZE = """
mutation TransactionInitialize(
  $checkoutId: ID!
  $amount: PositiveDecimal
  $paymentGateway: PaymentGatewayToInitialize!
) {
  transactionInitialize(
    id: $checkoutId
    amount: $amount
    paymentGateway: $paymentGateway
  ) {
    transaction { id }
    transactionEvent { type message }
    data
    errors { field message code }
  }
}
"""

TRANSACTION_PROCESS = """
mutation TransactionProcess($transactionId: ID!, $data: JSON) {
  transactionProcess(id: $transactionId, data: $data) {
    transaction { id }
    transactionEvent { type message }
    data
    errors { field message code }
  }
}
"""

CHECKOUT_COMPLETE = """
mutation CheckoutComplete($checkoutId: ID!) {
  checkoutComplete(id: $checkoutId) {
    order { id }
    errors { field message code }
  }
}
"""

# --- Account ------------------------------------------------------------------

TOKEN_CREATE = """
mutation TokenCreate($email: String!, $password: String!) {
  tokenCreate(email: $email, password: $password) {
    token
    errors { field message code }
  }
}
"""

ME = """
query Me {
  me { email }
}
"""

PROFILE = """
query Profile {
  me {
    email
    firstName
    lastName
    defaultShippingAddress {
      id
      firstName
      lastName
      streetAddress1
      streetAddress2
      city
      postalCode
      countryArea
      country { code }
    }
  }
}
"""

ACCOUNT_UPDATE = """
mutation AccountUpdate($firstName: String, $lastName: String) {
  accountUpdate(input: { firstName: $firstName, lastName: $lastName }) {
    errors { field message code }
  }
}
"""

ACCOUNT_ADDRESS_CREATE = """
mutation AccountAddressCreate($input: AddressInput!) {
  accountAddressCreate(input: $input) {
    address { id }
    errors { field message code }
  }
}
"""

ACCOUNT_ADDRESS_UPDATE = """
mutation AccountAddressUpdate($id: ID!, $input: AddressInput!) {
  accountAddressUpdate(id: $id, input: $input) {
    address { id }
    errors { field message code }
  }
}
"""

ACCOUNT_SET_DEFAULT_ADDRESS = """
mutation AccountSetDefaultAddress($id: ID!) {
  accountSetDefaultAddress(id: $id, type: SHIPPING) {
    errors { field message code }
  }
}
"""

PASSWORD_CHANGE = """
mutation PasswordChange($oldPassword: String!, $newPassword: String!) {
  passwordChange(oldPassword: $oldPassword, newPassword: $newPassword) {
    errors { field message code }
  }
}
"""

ACCOUNT_REGISTER = """
mutation AccountRegister(
  $email: String!
  $password: String!
  $firstName: String!
  $lastName: String!
  $redirectUrl: String!
  $channel: String!
) {
  accountRegister(
    input: {
      email: $email
      password: $password
      firstName: $firstName
      lastName: $lastName
      redirectUrl: $redirectUrl
      channel: $channel
    }
  ) {
    errors { field message code }
  }
}
"""

CONFIRM_ACCOUNT = """
mutation ConfirmAccount($email: String!, $token: String!) {
  confirmAccount(email: $email, token: $token) {
    errors { field message code }
  }
}
"""

REQUEST_PASSWORD_RESET = """
mutation RequestPasswordReset($email: String!, $redirectUrl: String!, $channel: String!) {
  requestPasswordReset(email: $email, redirectUrl: $redirectUrl, channel: $channel) {
    errors { field message code }
  }
}
"""

SET_PASSWORD = """
mutation SetPassword($email: String!, $token: String!, $password: String!) {
  setPassword(email: $email, token: $token, password: $password) {
    token
    errors { field message code }
  }
}
"""
