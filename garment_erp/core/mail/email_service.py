from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from typing import Any, Dict, List
import logging

from garment_erp.core.setting import config

logger = logging.getLogger(__name__)

# Email Configuration
conf = ConnectionConfig(
    MAIL_USERNAME=config.MAIL_USERNAME,
    MAIL_PASSWORD=config.MAIL_PASSWORD,
    MAIL_FROM=config.MAIL_FROM,
    MAIL_PORT=config.MAIL_PORT,
    MAIL_SERVER=config.MAIL_SERVER,
    MAIL_STARTTLS=config.MAIL_STARTTLS,
    MAIL_SSL_TLS=config.MAIL_SSL_TLS,
    MAIL_FROM_NAME=config.MAIL_FROM_NAME,
    USE_CREDENTIALS=bool(config.MAIL_USERNAME),
    VALIDATE_CERTS=True
)

fast_mail = FastMail(conf)


def render_daily_production_rows(reports: List[Dict[str, Any]]) -> str:
    rows = []
    for r in reports:
        rows.append(
            f"<tr><td>{r['line_no']}</td><td>{r['style_no']}</td><td>{r.get('buyer') or '-'}</td>"
            f"<td>{r.get('target_qty', 0)}</td><td>{r.get('production_qty', 0)}</td>"
            f"<td>{r.get('efficiency', 0)}%</td><td>{r.get('net_amount', 0):,.2f}</td></tr>"
        )
    return "\n".join(rows) or '<tr><td colspan="7">No production recorded</td></tr>'


class EmailService:
    """Service for sending emails"""

    @staticmethod
    async def send_daily_production_report(recipients: List[str], date: str, daily: Dict[str, Any]):
        """Send one day's production summary table"""
        summary = daily["summary"]
        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <style>
                body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
                .container {{ max-width: 800px; margin: 0 auto; padding: 20px; }}
                .header {{ background-color: #37474F; color: white; padding: 20px; text-align: center; }}
                table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
                th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
                th {{ background-color: #eceff1; }}
                .footer {{ text-align: center; margin-top: 20px; font-size: 12px; color: #666; }}
            </style>
        </head>
        <body>
            <div class="container">
                <div class="header">
                    <h1>Daily Production Report</h1>
                    <p>{date}</p>
                </div>
                <p>
                    Styles: <strong>{summary['total_styles']}</strong> |
                    Target: <strong>{summary['total_target_qty']}</strong> |
                    Production: <strong>{summary['total_production_qty']}</strong> |
                    Efficiency: <strong>{summary['overall_efficiency']}%</strong> |
                    Net Amount: <strong>{summary['total_net_amount']:,.2f}</strong>
                </p>
                <table>
                    <tr><th>Line</th><th>Style</th><th>Buyer</th><th>Target</th><th>Production</th><th>Efficiency</th><th>Net Amount</th></tr>
                    {render_daily_production_rows(daily['reports'])}
                </table>
                <div class="footer">
                    <p>This is an automated email. Please do not reply.</p>
                    <p>&copy; {config.MAIL_FROM_NAME}</p>
                </div>
            </div>
        </body>
        </html>
        """

        message = MessageSchema(
            subject=f"Daily Production Report - {date}",
            recipients=recipients,
            body=html_content,
            subtype=MessageType.html
        )

        try:
            await fast_mail.send_message(message)
            logger.info(f"Daily production report for {date} sent to {len(recipients)} recipient(s)")
        except Exception as e:
            logger.error(f"Failed to send daily production report for {date}: {str(e)}")
            raise
