import aws_cdk as cdk
from key_pair_stack import KeyPairStack

app = cdk.App()
KeyPairStack(
    app,
    "KeyPairStack",
    key_pair_name=app.node.try_get_context("keyPairName") or "cloudfront-signing",
    key_pair_description=app.node.try_get_context("keyPairDescription")
    or "CloudFront URL signing key",
)
app.synth()
